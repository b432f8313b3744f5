from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Literal, Optional, Union, get_args, get_origin

from pydantic.alias_generators import to_snake

JsonSchema = Dict[str, Any]

_SCALARS = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
}


def _type_schema(annotation: Any) -> JsonSchema:
    origin = get_origin(annotation)
    if origin is None:
        if isinstance(annotation, type) and issubclass(annotation, Enum):
            return {"type": "string", "enum": [member.value for member in annotation]}
        return {"type": _SCALARS.get(annotation, "string")}
    if origin is Literal:
        return {"type": "string", "enum": list(get_args(annotation))}
    if origin in (list, List, tuple):
        args = get_args(annotation)
        schema: JsonSchema = {"type": "array"}
        if args and args[0] is not Any:
            schema["items"] = _type_schema(args[0])
        return schema
    if origin in (dict, Dict):
        return {"type": "object"}
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        return _type_schema(args[0]) if args else {"type": "string"}
    return {"type": "string"}


def _parameter_schema(param: inspect.Parameter, annotation: Any) -> JsonSchema:
    schema = _type_schema(annotation)
    default = param.default
    if default is not inspect.Parameter.empty and default is not None:
        if isinstance(default, Enum):
            default = default.value
        if isinstance(default, (str, int, float, bool)):
            schema["default"] = default
    return schema


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    tags: tuple[str, ...]
    signature: inspect.Signature
    read_only: bool = False
    destructive: bool = False
    type_hints: Dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def parameter_schema(self) -> JsonSchema:
        schema: JsonSchema = {
            "type": "object",
            "properties": {},
            "required": [],
            "additionalProperties": False,
        }
        for param in self.signature.parameters.values():
            annotation = self.type_hints.get(param.name, str)
            schema["properties"][param.name] = _parameter_schema(param, annotation)
            if param.default is inspect.Parameter.empty:
                schema["required"].append(param.name)
        if not schema["required"]:
            schema.pop("required")
        return schema


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(
    name: str,
    *,
    description: str,
    category: str,
    tags: Optional[Iterable[str]] = None,
    read_only: bool = False,
    destructive: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        hints = typing.get_type_hints(func)
        hints.pop("return", None)
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            tags=tuple(tags or ()),
            signature=inspect.signature(func),
            read_only=read_only,
            destructive=destructive,
            type_hints=hints,
        )
        return func

    return decorator


def get_api_functions() -> List[ApiFunction]:
    return list(REGISTRY.values())


def call_api(name: str, **kwargs: Any) -> Any:
    if name not in REGISTRY:
        raise KeyError(f"API function '{name}' is not registered.")
    # camelCase argument names are accepted alongside snake_case ones.
    arguments = {to_snake(key): value for key, value in kwargs.items()}
    return REGISTRY[name].func(**arguments)
