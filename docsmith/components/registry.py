"""Schema registry that validates and resolves component props.

A :class:`ComponentRegistry` maps component names to a
:class:`ComponentSchema`. Resolving a name and a property bag runs the
schema's checks, fills declared defaults, and calls the schema handler inside
a guarded call. Every problem comes back as a message on the result; nothing
raised by a validator or handler escapes :meth:`ComponentRegistry.resolve`.

Registries are constructed explicitly and passed to the renderer. The CLI
builds the shared instance with
:func:`docsmith.components.builtins.create_default_registry`.

Example
-------
>>> from docsmith.components.registry import (
...     ComponentRegistry,
...     ComponentSchema,
...     PropSpec,
... )
>>> from docsmith.components.values import PropKind
>>> registry = ComponentRegistry()
>>> registry.register(
...     "Card",
...     ComponentSchema(
...         handler=dict, props={"title": PropSpec(PropKind.STRING, required=True)}
...     ),
... )
>>> registry.resolve("Card", {}).errors
['Required prop "title" is missing for component "Card"']
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ

from docsmith.errors import ErrorKind, InvalidComponentError

from .models import ComponentDefinition, ValidationResult
from .values import (
    UNDEFINED,
    PropertyBag,
    PropKind,
    PropValue,
    classify,
    is_absent,
    matches_kind,
)

logger = logging.getLogger(__name__)

Handler = cabc.Callable[[PropertyBag], typ.Any]
PropValidator = cabc.Callable[[PropValue], bool]
SchemaValidator = cabc.Callable[[PropertyBag], bool]

_NO_DEFAULT: typ.Final = object()


@dc.dataclass(frozen=True, slots=True)
class PropSpec:
    """Declaration of a single component prop.

    Attributes
    ----------
    kind : PropKind
        Expected kind of the value when it is provided.
    required : bool
        Whether the prop must be present (``None`` and ``UNDEFINED`` count as
        absent).
    default : object
        Value applied when the prop is missing or ``UNDEFINED``. Leave unset
        for no default.
    validator : callable, optional
        Extra predicate run on provided values.
    """

    kind: PropKind
    required: bool = False
    default: typ.Any = _NO_DEFAULT
    validator: PropValidator | None = None

    @property
    def has_default(self) -> bool:
        """Return True when a default value is declared."""
        return self.default is not _NO_DEFAULT


@dc.dataclass(slots=True)
class ComponentSchema:
    """Registry entry describing how a component is validated and rendered.

    Attributes
    ----------
    handler : callable
        Receives the resolved property bag and returns an opaque render
        output handed back on :class:`ResolutionResult`.
    props : dict[str, PropSpec]
        Declared props; undeclared props pass through unchecked.
    validator : callable, optional
        Whole-bag predicate run before the per-prop checks.
    name : str
        Filled in by :meth:`ComponentRegistry.register`.
    """

    handler: Handler | None
    props: dict[str, PropSpec] = dc.field(default_factory=dict)
    validator: SchemaValidator | None = None
    name: str = ""

    @property
    def required_props(self) -> frozenset[str]:
        """Return the names of props declared as required."""
        return frozenset(name for name, spec in self.props.items() if spec.required)


@dc.dataclass(slots=True)
class ResolutionResult:
    """Outcome of resolving one component.

    Attributes
    ----------
    props : PropertyBag
        The resolved bag (defaults applied) on success, otherwise the props as
        supplied.
    errors : list[str]
        Human-readable problems; empty exactly when the resolution succeeded.
    issues : list[tuple[ErrorKind, str]]
        The same messages tagged with their :class:`ErrorKind`.
    output : object
        Whatever the handler returned; ``None`` on failure.
    """

    props: PropertyBag
    errors: list[str] = dc.field(default_factory=list)
    issues: list[tuple[ErrorKind, str]] = dc.field(default_factory=list)
    output: typ.Any = None

    @property
    def is_valid(self) -> bool:
        """Return True when no errors were recorded."""
        return not self.errors

    def add(self, kind: ErrorKind, message: str) -> None:
        """Record an error message with its classification."""
        self.issues.append((kind, message))
        self.errors.append(message)


class ComponentRegistry:
    """Process-scoped store of component schemas.

    The registry performs no locking; mutate it during start-up and treat it
    as read-only while documents are being rendered.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, ComponentSchema] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def register(self, name: str, schema: ComponentSchema) -> None:
        """Register ``schema`` under ``name``, replacing any previous entry.

        Raises
        ------
        InvalidComponentError
            If ``name`` is empty or not a string, or the schema has no
            callable handler.
        """
        if not name or not isinstance(name, str):
            msg = "Component name must be a non-empty string"
            raise InvalidComponentError(msg)
        if not callable(schema.handler):
            msg = f'Component "{name}" must have a callable handler'
            raise InvalidComponentError(msg)
        if name in self._schemas:
            logger.debug("Replacing registered component %s", name)
        self._schemas[name] = dc.replace(schema, name=name)

    def unregister(self, name: str) -> bool:
        """Remove ``name`` and return whether it was registered."""
        return self._schemas.pop(name, None) is not None

    def clear(self) -> None:
        """Remove every registered component."""
        self._schemas.clear()

    def has(self, name: str) -> bool:
        """Return True when ``name`` is registered."""
        return name in self._schemas

    def list_names(self) -> list[str]:
        """Return registered component names in registration order."""
        return list(self._schemas)

    def get(self, name: str) -> ComponentSchema | None:
        """Return the schema registered under ``name``, if any."""
        return self._schemas.get(name)

    def resolve(
        self, name: str, props: cabc.Mapping[str, PropValue] | None = None
    ) -> ResolutionResult:
        """Validate ``props`` for ``name``, apply defaults, and run the handler.

        Parameters
        ----------
        name : str
            Registered component name.
        props : Mapping[str, PropValue], optional
            Parsed property values; defaults to an empty bag.

        Returns
        -------
        ResolutionResult
            ``is_valid`` is ``False`` for unknown components, failed checks,
            or a handler that raised. The handler's return value is exposed as
            ``output`` on success.
        """
        supplied: PropertyBag = dict(props or {})
        schema = self._schemas.get(name)
        if schema is None:
            result = ResolutionResult(props=supplied)
            result.add(ErrorKind.UNKNOWN_COMPONENT, _unknown_message(name))
            return result

        result = ResolutionResult(props=supplied)
        for kind, message in _check_props(schema, supplied):
            result.add(kind, message)
        if not result.is_valid:
            return result

        resolved = _apply_defaults(schema, supplied)
        result.props = resolved
        try:
            result.output = schema.handler(dict(resolved))  # type: ignore[misc]
        except Exception as exc:  # noqa: BLE001 - handler failures become data
            logger.warning("Component %s failed to render: %s", name, exc)
            result.output = None
            result.add(
                ErrorKind.RENDER_ERROR,
                f'Error rendering component "{name}": {str(exc) or type(exc).__name__}',
            )
        return result

    def validate_definition(self, definition: ComponentDefinition) -> ValidationResult:
        """Run the schema checks for ``definition`` without rendering it."""
        schema = self._schemas.get(definition.name)
        if schema is None:
            return ValidationResult(errors=[_unknown_message(definition.name)])
        return ValidationResult(
            errors=[message for _, message in _check_props(schema, definition.props)]
        )


def _unknown_message(name: str) -> str:
    return f'Component "{name}" is not registered'


def _passes(predicate: cabc.Callable[[typ.Any], bool], value: object) -> bool:
    """Run a user predicate, treating an exception as a rejection."""
    try:
        return bool(predicate(value))
    except Exception:  # noqa: BLE001 - a crashing validator rejects the value
        logger.debug("Validator %r raised", predicate, exc_info=True)
        return False


def _describe(value: object) -> str:
    try:
        return classify(value).value
    except TypeError:
        return type(value).__name__


def _check_props(
    schema: ComponentSchema, props: cabc.Mapping[str, PropValue]
) -> list[tuple[ErrorKind, str]]:
    """Return every validation problem for ``props`` against ``schema``."""
    problems: list[tuple[ErrorKind, str]] = []
    name = schema.name
    if schema.validator is not None and not _passes(schema.validator, dict(props)):
        problems.append(
            (
                ErrorKind.CUSTOM_COMPONENT_VALIDATION_FAILED,
                f'Custom validation failed for component "{name}"',
            )
        )

    for prop_name, spec in schema.props.items():
        value = props.get(prop_name)
        if is_absent(value):
            if spec.required:
                problems.append(
                    (
                        ErrorKind.MISSING_REQUIRED_PROP,
                        f'Required prop "{prop_name}" is missing for component "{name}"',
                    )
                )
            continue
        if not matches_kind(value, spec.kind):
            problems.append(
                (
                    ErrorKind.TYPE_MISMATCH,
                    f'Prop "{prop_name}" has invalid type for component "{name}". '
                    f"Expected {spec.kind.value}, got {_describe(value)}",
                )
            )
        if spec.validator is not None and not _passes(spec.validator, value):
            problems.append(
                (
                    ErrorKind.CUSTOM_PROP_VALIDATION_FAILED,
                    f'Prop "{prop_name}" failed custom validation for component "{name}"',
                )
            )
    return problems


def _apply_defaults(
    schema: ComponentSchema, props: cabc.Mapping[str, PropValue]
) -> PropertyBag:
    """Return a copy of ``props`` with declared defaults filled in."""
    resolved: PropertyBag = dict(props)
    for prop_name, spec in schema.props.items():
        if spec.has_default and resolved.get(prop_name, UNDEFINED) is UNDEFINED:
            resolved[prop_name] = copy.deepcopy(spec.default)
    return resolved


__all__ = [
    "ComponentRegistry",
    "ComponentSchema",
    "Handler",
    "PropSpec",
    "PropValidator",
    "ResolutionResult",
    "SchemaValidator",
]
