"""Flow executor: runs one flow invocation through its stages.

    VALIDATING -> RENDERING -> INVOKING -> NORMALIZING -> DONE

Any stage may fail; the raised FlowError records where. Stages of one
invocation never overlap, and nothing is retried. Concurrent invocations
of one executor share only the read-only registry and tier gate, plus the
executor's own semaphore that caps outstanding model calls.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import structlog
from jinja2 import TemplateError as JinjaTemplateError

from config import Settings, settings as default_settings
from contracts.flow import FlowDefinition
from contracts.tier_contracts import Tier
from engine.errors import (
    Cancelled,
    FeatureLocked,
    FieldValidationError,
    FlowError,
    InvalidInput,
    MalformedResponse,
    ModelError,
    TemplateError,
    UnknownFeature,
    UpstreamFailure,
)
from engine.normalizer import ResponseNormalizer
from engine.registry import SchemaRegistry
from engine.renderer import PromptRenderer
if TYPE_CHECKING:
    from gating.tier_gate import TierGate
    from providers.base import ModelInvoker

logger = structlog.get_logger(__name__)

_SEMAPHORE_POLL_SECONDS = 0.1


class Stage(str, Enum):
    """Stages of a single flow invocation."""
    VALIDATING = "validating"
    RENDERING = "rendering"
    INVOKING = "invoking"
    NORMALIZING = "normalizing"
    DONE = "done"


@dataclass
class FlowRequest:
    """One invocation for execute_many()."""
    flow_name: str
    raw_input: Dict[str, Any] = field(default_factory=dict)
    tier: Optional[Tier] = None


@dataclass
class FlowOutcome:
    """Result of one request from execute_many(): an output or a FlowError."""
    request: FlowRequest
    output: Optional[Dict[str, Any]] = None
    error: Optional[FlowError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FlowExecutor:
    """Orchestrates validation, rendering, model invocation and normalization.

    Usage:
        executor = FlowExecutor(build_registry(), get_invoker(), gate=TierGate())
        output = executor.execute("getCoinTradingSignal", {"coinName": "Dogecoin"}, tier=Tier.PREMIUM)
    """

    def __init__(
        self,
        registry: SchemaRegistry,
        invoker: "ModelInvoker",
        renderer: Optional[PromptRenderer] = None,
        normalizer: Optional[ResponseNormalizer] = None,
        gate: Optional["TierGate"] = None,
        config: Optional[Settings] = None,
    ):
        """Initialize the executor.

        Args:
            registry: Flow definitions, read-only from here on
            invoker: Boundary to the generative model
            renderer: Prompt renderer (default PromptRenderer())
            normalizer: Response normalizer (default ResponseNormalizer())
            gate: Tier gate; when given, gated flows are refused for locked tiers
            config: Settings for concurrency and gate enforcement

        Raises:
            UnknownFeature: If a registered flow names a feature the gate doesn't know
        """
        self.registry = registry
        self.invoker = invoker
        self.renderer = renderer or PromptRenderer()
        self.normalizer = normalizer or ResponseNormalizer()
        self.gate = gate
        self.config = config or default_settings
        self._model_slots = threading.BoundedSemaphore(self.config.max_concurrent_invocations)

        if self.gate is not None:
            for definition in self.registry:
                if definition.feature is None:
                    continue
                try:
                    self.gate.rule(definition.feature)
                except UnknownFeature:
                    raise UnknownFeature(definition.feature, definition.name) from None

    def execute(
        self,
        flow_name: str,
        raw_input: Optional[Dict[str, Any]] = None,
        tier: Optional[Tier] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Dict[str, Any]:
        """Run a flow once.

        Args:
            flow_name: Registered flow name
            raw_input: Caller input, validated against the flow's input schema
            tier: Caller's subscription tier (treated as Free when omitted)
            cancel_event: Set by the caller to abandon the invocation between stages

        Returns:
            The fully normalized flow output

        Raises:
            UnknownFlowError: If no such flow is registered
            FeatureLocked: If the tier gate refuses the caller's tier
            InvalidInput: If the input fails validation (the model is not called)
            TemplateError: If the prompt template cannot be rendered
            UpstreamFailure: If the model call fails
            MalformedResponse: If the model reply fails the output schema
            Cancelled: If cancel_event was set before a stage started
        """
        definition = self.registry.lookup(flow_name)
        log = logger.bind(flow=flow_name)

        try:
            return self._run(definition, raw_input or {}, tier, cancel_event, log)
        except FlowError as e:
            stage = e.stage.value if isinstance(e.stage, Stage) else None
            log.warning("flow_failed", stage=stage, error_type=type(e).__name__, error=str(e))
            raise

    def _run(
        self,
        definition: FlowDefinition,
        raw_input: Dict[str, Any],
        tier: Optional[Tier],
        cancel_event: Optional[threading.Event],
        log,
    ) -> Dict[str, Any]:
        name = definition.name

        stage = self._enter(Stage.VALIDATING, name, cancel_event, log)
        self._check_access(definition, tier, stage)
        try:
            validated = self.normalizer.normalize(raw_input, definition.input_schema)
        except FieldValidationError as e:
            raise InvalidInput(name, e, stage) from e

        stage = self._enter(Stage.RENDERING, name, cancel_event, log)
        try:
            prompt_text = self.renderer.render(definition.prompt_template, validated)
        except JinjaTemplateError as e:
            raise TemplateError(f"{name}: prompt template error, {e}", name, stage) from e

        stage = self._enter(Stage.INVOKING, name, cancel_event, log)
        self._acquire_model_slot(name, stage, cancel_event)
        try:
            candidate = self.invoker.invoke(
                prompt_text, definition.output_schema, definition.model_config
            )
        except ModelError as e:
            raise UpstreamFailure(name, e, stage) from e
        finally:
            self._model_slots.release()

        stage = self._enter(Stage.NORMALIZING, name, cancel_event, log)
        try:
            output = self.normalizer.normalize(candidate, definition.output_schema)
        except FieldValidationError as e:
            raise MalformedResponse(name, e, stage) from e

        log.info("flow_completed", stage=Stage.DONE.value)
        return output

    def _enter(
        self,
        stage: Stage,
        flow_name: str,
        cancel_event: Optional[threading.Event],
        log,
    ) -> Stage:
        if cancel_event is not None and cancel_event.is_set():
            raise Cancelled(flow_name, stage)
        log.debug("flow_stage", stage=stage.value)
        return stage

    def _check_access(self, definition: FlowDefinition, tier: Optional[Tier], stage: Stage) -> None:
        if self.gate is None or not self.config.enforce_tier_gate or definition.feature is None:
            return
        tier = tier or Tier.FREE
        if not self.gate.is_unlocked(tier, definition.feature):
            raise FeatureLocked(definition.name, definition.feature, tier, stage)

    def _acquire_model_slot(
        self,
        flow_name: str,
        stage: Stage,
        cancel_event: Optional[threading.Event],
    ) -> None:
        if cancel_event is None:
            self._model_slots.acquire()
            return
        while not self._model_slots.acquire(timeout=_SEMAPHORE_POLL_SECONDS):
            if cancel_event.is_set():
                raise Cancelled(flow_name, stage)

    def execute_many(
        self,
        requests: Sequence[FlowRequest],
        max_workers: Optional[int] = None,
    ) -> List[FlowOutcome]:
        """Run independent invocations concurrently.

        Args:
            requests: Invocations to run
            max_workers: Thread pool size (default: max_concurrent_invocations)

        Returns:
            One FlowOutcome per request, in request order
        """
        if not requests:
            return []
        workers = max_workers or self.config.max_concurrent_invocations
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._outcome, request) for request in requests]
            return [future.result() for future in futures]

    def _outcome(self, request: FlowRequest) -> FlowOutcome:
        try:
            output = self.execute(request.flow_name, request.raw_input, tier=request.tier)
        except FlowError as e:
            return FlowOutcome(request=request, error=e)
        return FlowOutcome(request=request, output=output)
