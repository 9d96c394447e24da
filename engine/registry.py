"""Schema registry: the immutable catalog of flow definitions.

Built once at startup and handed to the executor; there is no API to replace
or remove a definition after it is registered.
"""

from typing import Dict, Iterator, List, Optional

import structlog

from contracts.flow import FlowDefinition, ModelConfig
from contracts.schema import FieldSchema
from engine.errors import DuplicateFlowError, UnknownFlowError
from engine.normalizer import ResponseNormalizer

logger = structlog.get_logger(__name__)


class SchemaRegistry:
    """Holds FlowDefinitions keyed by name."""

    def __init__(self):
        self._flows: Dict[str, FlowDefinition] = {}
        self._checker = ResponseNormalizer()

    def register(
        self,
        name: str,
        input_schema: FieldSchema,
        output_schema: FieldSchema,
        prompt_template: str = "",
        model_config: Optional[ModelConfig] = None,
        feature: Optional[str] = None,
        description: str = "",
    ) -> FlowDefinition:
        """Declare and register a flow.

        Args:
            name: Unique flow name, e.g. 'getCoinTradingSignal'
            input_schema: Object schema the caller's input must satisfy
            output_schema: Object schema the model's reply is normalized against
            prompt_template: Opaque template text for the prompt renderer
            model_config: Optional per-flow model overrides
            feature: Tier-gate feature id that unlocks this flow, if gated
            description: Human-readable summary

        Returns:
            The registered, immutable FlowDefinition

        Raises:
            DuplicateFlowError: If `name` is already registered
            FieldValidationError: If a declared default does not fit its field
        """
        definition = FlowDefinition(
            name=name,
            input_schema=input_schema,
            output_schema=output_schema,
            prompt_template=prompt_template,
            model_config=model_config or ModelConfig(),
            feature=feature,
            description=description,
        )
        return self.add(definition)

    def add(self, definition: FlowDefinition) -> FlowDefinition:
        """Register an already-built FlowDefinition."""
        if definition.name in self._flows:
            raise DuplicateFlowError(definition.name)

        self._checker.check_defaults(definition.input_schema)
        self._checker.check_defaults(definition.output_schema)

        self._flows[definition.name] = definition
        logger.debug("flow_registered", flow=definition.name, feature=definition.feature)
        return definition

    def lookup(self, name: str) -> FlowDefinition:
        """Get a flow definition by name.

        Raises:
            UnknownFlowError: If no flow is registered under `name`
        """
        try:
            return self._flows[name]
        except KeyError:
            raise UnknownFlowError(name) from None

    def names(self) -> List[str]:
        """Registered flow names, in registration order."""
        return list(self._flows)

    def __contains__(self, name: object) -> bool:
        return name in self._flows

    def __len__(self) -> int:
        return len(self._flows)

    def __iter__(self) -> Iterator[FlowDefinition]:
        return iter(list(self._flows.values()))
