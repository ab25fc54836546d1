"""
Request dispatcher.

Turns a base request plus a batch of candidate parameters into one outbound
probe: clone, inject on the configured attack surface, apply the cache
buster and Content-Length fix-up, send, then hand discovery responses to
the autopilot callback when it is enabled.

Encoding errors are not caught here. They abort the single probe and reach
the caller unchanged; retry policy belongs to the transport and the miner.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Awaitable, Callable, Union

import structlog

from paramfinder.config.settings import MinerConfig
from paramfinder.core.injection import (
    BodyInjector,
    HeaderInjector,
    InjectionStrategy,
    QueryInjector,
)
from paramfinder.core.models import (
    AttackSurface,
    BodyFormat,
    Parameter,
    Request,
    RequestContext,
)
from paramfinder.core.mutators import CacheBuster, update_content_length

logger = structlog.get_logger(__name__)

DecisionCallback = Callable[[Any], Union[bool, Awaitable[bool]]]
LogSink = Callable[[str], None]

# Surfaces that get a cache buster when it is enabled
CACHE_BUSTER_SURFACES = frozenset({AttackSurface.QUERY, AttackSurface.HEADERS})


class Transport(ABC):
    """Sends a fully-formed request and returns the target's response."""

    @abstractmethod
    async def send(self, request: Request) -> Any:
        """Send the request. No retry happens at this layer."""
        ...


class Requester:
    """
    Injection engine bound to one mining session.

    Create one per target and reuse it for every probe: the body format and
    multipart boundary are learnt on the first body injection and kept.

    Usage:
        requester = Requester(MinerConfig(attack_type="body"), transport)
        response = await requester.send_request_with_params(
            base_request,
            [Parameter("debug", "1")],
            RequestContext.DISCOVERY,
        )
    """

    def __init__(
        self,
        config: MinerConfig,
        transport: Transport,
        log_sink: LogSink | None = None,
    ) -> None:
        """
        Initialize the requester.

        Args:
            config: Live miner configuration, read on every call.
            transport: Capability used to send requests.
            log_sink: Optional receiver for user-facing notices.
        """
        self.config = config
        self._transport = transport
        self._log_sink = log_sink
        self._cache_buster = CacheBuster()
        self._body = BodyInjector(
            json_path=lambda: self.config.json_body_path,
            on_format_detected=self._announce_format,
        )
        self._strategies: dict[AttackSurface, InjectionStrategy] = {
            AttackSurface.QUERY: QueryInjector(),
            AttackSurface.HEADERS: HeaderInjector(),
            AttackSurface.BODY: self._body,
        }

    @property
    def body_format(self) -> BodyFormat | None:
        return self._body.body_format

    @property
    def multipart_boundary(self) -> str | None:
        return self._body.multipart_boundary

    def build_request(
        self,
        request: Request,
        parameters: Sequence[Parameter],
        context: RequestContext | None = None,
    ) -> Request:
        """
        Synthesize the outbound request without sending it.

        Args:
            request: Base request. Never modified.
            parameters: Candidate parameters, in order.
            context: Why the request is being sent. None keeps the base
                request's own tag.

        Returns:
            A new Request carrying the injected parameters.

        Raises:
            InjectionError: If the body cannot be encoded.
        """
        surface = self.config.attack_type
        request_copy = request.clone(context=context)

        if self.config.debug:
            self._notify(
                f"Sending request with {len(parameters)} parameters "
                f"on {surface.value} ({len(request_copy.headers)} headers)",
                level="debug",
            )

        self._strategies[surface].inject(request_copy, parameters)

        # After injection so a same-named candidate cannot overwrite it
        if self.config.cache_buster_enabled and surface in CACHE_BUSTER_SURFACES:
            self._cache_buster.apply(request_copy)

        if self.config.update_content_length:
            update_content_length(request_copy)

        return request_copy

    async def send_request_with_params(
        self,
        request: Request,
        parameters: Sequence[Parameter],
        context: RequestContext | None = None,
        *,
        autopilot: DecisionCallback | None = None,
    ) -> Any:
        """
        Build, send and (for discovery) review one probe request.

        Args:
            request: Base request. Never modified.
            parameters: Candidate parameters, in order.
            context: Why the request is being sent. None keeps the base
                request's own tag.
            autopilot: Decision callback invoked with the response for
                discovery requests when autopilot is enabled. Returns True
                when it took a corrective action.

        Returns:
            The transport's response.
        """
        outbound = self.build_request(request, parameters, context)

        logger.debug(
            "probe_sending",
            request_id=outbound.id,
            surface=self.config.attack_type.value,
            parameters=len(parameters),
        )
        response = await self._transport.send(outbound)

        if (
            self.config.autopilot_enabled
            and context is RequestContext.DISCOVERY
            and autopilot is not None
        ):
            outcome = autopilot(response)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if outcome:
                self._notify("Autopilot has taken action.")

        return response

    def _announce_format(self, body_format: BodyFormat) -> None:
        self._notify(f"Determined body format: {body_format.value}")

    def _notify(self, message: str, level: str = "info") -> None:
        """Forward a notice to the log sink. Sink failures never reach the probe."""
        getattr(logger, level)("requester_notice", message=message)
        if self._log_sink is None:
            return
        try:
            self._log_sink(message)
        except Exception as e:
            logger.warning("log_sink_failed", error=str(e), error_type=type(e).__name__)
