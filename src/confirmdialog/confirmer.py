"""Runtime confirmation session bound to one definition and one parameter set."""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from confirmdialog.errors import NotConfiguredError
from confirmdialog.models import ConfirmerDefinition, Params, RenderState, TextSource

logger = logging.getLogger(__name__)


class ConfirmerInstance:
    """A live confirmation waiting for the user's answer.

    Heading and question are resolved once, at activation.  The ajax flag is
    captured by value from whoever activates the instance; later changes to
    the controller's mode do not reach it.
    """

    def __init__(
        self,
        definition: ConfirmerDefinition,
        params: Params | None = None,
        ajax_enabled: bool = True,
    ) -> None:
        self.definition = definition
        self.params: Mapping[str, Any] = MappingProxyType(dict(params or {}))
        self.ajax_enabled = ajax_enabled
        self.heading = ""
        self.question = ""

    @classmethod
    def activate(
        cls,
        definition: ConfirmerDefinition,
        params: Params | None = None,
        ajax_enabled: bool = True,
    ) -> "ConfirmerInstance":
        """Build an instance for a configured definition and resolve its text."""
        if not definition.configured:
            raise NotConfiguredError(f"Confirmer '{definition.name}' is not configured.")
        instance = cls(definition, params, ajax_enabled)
        instance.heading = instance._resolve(definition.heading)
        instance.question = instance._resolve(definition.question)
        logger.debug("Activated confirmer %r with %d param(s)", definition.name, len(instance.params))
        return instance

    def _resolve(self, source: TextSource | None) -> str:
        if callable(source):
            return str(source(self, self.params))
        return source or ""

    @property
    def name(self) -> str:
        return self.definition.name

    def enable_ajax(self) -> "ConfirmerInstance":
        self.ajax_enabled = True
        return self

    def disable_ajax(self) -> "ConfirmerInstance":
        self.ajax_enabled = False
        return self

    def confirm(self) -> None:
        """Invoke the bound handler with a copy of the activation parameters."""
        handler = self.definition.handler
        if handler is None:
            raise NotConfiguredError(f"Confirmer '{self.name}' has no handler.")
        logger.info("Confirmed %r", self.name)
        handler(dict(self.params))

    def render_state(self) -> RenderState:
        return RenderState(
            name=self.name,
            heading=self.heading,
            question=self.question,
            params=self.params,
            ajax=self.ajax_enabled,
        )

    def __repr__(self) -> str:
        return f"ConfirmerInstance(name={self.name!r}, params={dict(self.params)!r})"
