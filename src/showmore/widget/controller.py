"""Expand/collapse state machine for show-more instances.

Each instance is Collapsed after attach (or NoControl when the content fits),
and flips between Collapsed and Expanded on toggle. Reconfiguring always
starts over from the content captured at attach time.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from showmore.content.truncator import truncate
from showmore.core.config import load_defaults
from showmore.core.exceptions import InvalidCommand, MissingArgument
from showmore.core.models import (
    CommandName,
    Instance,
    MoreOptions,
    RenderInstruction,
    ViewState,
)
from showmore.widget.registry import InstanceRegistry

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class ToggleController:
    """Owns the instance registry and runs every widget operation."""

    def __init__(self, defaults: Optional[MoreOptions] = None) -> None:
        self._defaults = defaults if defaults is not None else load_defaults()
        self.registry = InstanceRegistry()

    @property
    def defaults(self) -> MoreOptions:
        return self._defaults

    def set_defaults(self, settings: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> ToggleController:
        """Override the defaults used by later attaches."""
        self._defaults = self._defaults.merge({**(settings or {}), **kwargs})
        return self

    # --- Lifecycle ---

    def attach(
        self, handle: str, content: str, options: Optional[Mapping[str, Any]] = None,
    ) -> RenderInstruction:
        """Start managing ``content`` under ``handle``.

        Attaching a handle that is already attached changes nothing and
        returns its current view.
        """
        existing = self.registry.lookup(handle)
        if existing is not None:
            logger.debug("Instance %s already attached", handle)
            return self._render(existing)

        instance = Instance(handle=handle, original_content=content, options=self._defaults.merge(options))
        self._retruncate(instance)
        self.registry.create(instance)
        logger.debug("Attached %s (%s)", handle, instance.state.value)
        return self._render(instance)

    def reconfigure(
        self,
        handle: str,
        options: Union[Mapping[str, Any], str, None] = None,
        value: Any = _UNSET,
    ) -> Optional[RenderInstruction]:
        """Merge new options and re-truncate from the original content.

        Accepts a mapping of options or a single key with ``value``. A key
        given without a value changes nothing. Any expansion is discarded.
        Returns None when ``handle`` is not attached.
        """
        instance = self.registry.lookup(handle)
        if instance is None:
            return None
        if isinstance(options, str):
            options = {} if value is _UNSET else {options: value}
        instance.options = instance.options.merge(options)
        self._retruncate(instance)
        logger.debug("Reconfigured %s (%s)", handle, instance.state.value)
        return self._render(instance)

    def toggle(self, handle: str) -> Optional[RenderInstruction]:
        """Flip between Collapsed and Expanded.

        Returns None, without calling ``on_change``, when there is no control
        to act on.
        """
        instance = self.registry.lookup(handle)
        if instance is None or not instance.truncated or instance.control_removed:
            return None

        expanding = not instance.expanded
        instance.expanded = expanding
        if expanding and not instance.options.toggle:
            instance.control_removed = True
        logger.debug("Toggled %s -> %s", handle, instance.state.value)

        if instance.options.on_change is not None:
            instance.options.on_change(expanding)
        return self._render(instance)

    def detach(self, handle: str) -> Optional[str]:
        """Forget ``handle`` and return its original content."""
        instance = self.registry.remove(handle)
        if instance is None:
            return None
        logger.debug("Detached %s", handle)
        return instance.original_content

    # --- Accessors ---

    def is_attached(self, handle: str) -> bool:
        return handle in self.registry

    def get_options(self, handle: str, key: Optional[str] = None) -> Any:
        instance = self.registry.lookup(handle)
        if instance is None:
            return None
        if key is None:
            return instance.options.model_copy()
        return instance.options.get(key)

    def render(self, handle: str) -> Optional[RenderInstruction]:
        instance = self.registry.lookup(handle)
        return self._render(instance) if instance is not None else None

    # --- Command surface ---

    def command(self, name: str, handle: str, *args: Any) -> Any:
        """Run a named command against ``handle``.

        Raises InvalidCommand for names outside the known command set, and
        MissingArgument when ``attach`` is given no content.
        """
        try:
            command = CommandName(name)
        except ValueError:
            raise InvalidCommand(name) from None

        if command is CommandName.ATTACH:
            if not args:
                raise MissingArgument(name, "content")
            return self.attach(handle, *args)
        if command in (CommandName.CHANGE, CommandName.OPTION):
            return self.reconfigure(handle, *args)
        if command is CommandName.TOGGLE:
            return self.toggle(handle)
        if command is CommandName.DESTROY:
            return self.detach(handle)
        return self.get_options(handle, *args)

    # --- Internals ---

    def _retruncate(self, instance: Instance) -> None:
        instance.result = truncate(instance.original_content, instance.options)
        instance.expanded = False
        instance.control_removed = False

    def _render(self, instance: Instance) -> RenderInstruction:
        state = instance.state
        if state is ViewState.NO_CONTROL:
            return RenderInstruction(handle=instance.handle, state=state, content=instance.original_content)

        opts = instance.options
        result = instance.result
        expanded = state is ViewState.EXPANDED
        if instance.control_removed:
            label = None
        else:
            label = opts.less_text if expanded else opts.more_text
        return RenderInstruction(
            handle=instance.handle,
            state=state,
            visible_prefix=result.visible_prefix,
            ellipsis=result.ellipsis,
            hidden_remainder=result.hidden_remainder,
            remainder_hidden=not expanded,
            ellipsis_hidden=expanded,
            control_label=label,
        )
