"""Declarative building blocks for tool definitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple, Union

STRING = "string"
BOOLEAN = "boolean"
ENUM = "enum"
STRING_ARRAY = "string_array"
OBJECT_ARRAY = "object_array"

PathBuilder = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True, slots=True)
class Param:
    """A single named field in a tool's parameter spec."""

    name: str
    kind: str
    description: str = ""
    required: bool = True
    choices: Tuple[str, ...] = ()
    fields: Tuple["Param", ...] = ()
    # Sent as an HTTP header value, so it must be printable ASCII.
    header: bool = False

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any]
        if self.kind == STRING:
            schema = {"type": "string"}
        elif self.kind == BOOLEAN:
            schema = {"type": "boolean"}
        elif self.kind == ENUM:
            schema = {"type": "string", "enum": list(self.choices)}
        elif self.kind == STRING_ARRAY:
            schema = {"type": "array", "items": {"type": "string"}}
        elif self.kind == OBJECT_ARRAY:
            schema = {"type": "array", "items": object_schema(self.fields)}
        else:
            raise ValueError(f"Unsupported parameter kind: {self.kind}")
        if self.description:
            schema["description"] = self.description
        return schema


def object_schema(fields: Tuple[Param, ...]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {field.name: field.json_schema() for field in fields},
        "required": [field.name for field in fields if field.required],
    }


def string(name: str, description: str = "", *, required: bool = True, header: bool = False) -> Param:
    return Param(name=name, kind=STRING, description=description, required=required, header=header)


def boolean(name: str, description: str = "", *, required: bool = True) -> Param:
    return Param(name=name, kind=BOOLEAN, description=description, required=required)


def enum(name: str, choices: Tuple[str, ...], description: str = "", *, required: bool = True) -> Param:
    return Param(name=name, kind=ENUM, description=description, required=required, choices=choices)


def string_array(name: str, description: str = "", *, required: bool = True) -> Param:
    return Param(name=name, kind=STRING_ARRAY, description=description, required=required)


def object_array(
    name: str, fields: Tuple[Param, ...], description: str = "", *, required: bool = True
) -> Param:
    return Param(name=name, kind=OBJECT_ARRAY, description=description, required=required, fields=fields)


AUTH_KEY = string("authKey", "Auth key (bearer token) obtained from get_auth_key", header=True)
TESTNET = boolean("testnet", "Route the request to the testnet API", required=False)
WALLET_TYPES = ("evm", "solana")


@dataclass(frozen=True, slots=True)
class BodyRule:
    """
    How the JSON request body is assembled from validated parameters.

    ``none`` sends no body, ``param`` sends the value of the single named
    parameter as the whole body and ``fields`` sends an object made of the named
    parameters (absent optional ones are left out).
    """

    kind: str = "none"
    names: Tuple[str, ...] = ()

    def build(self, params: Mapping[str, Any]) -> Any:
        if self.kind == "none":
            return None
        if self.kind == "param":
            return params[self.names[0]]
        if self.kind == "fields":
            return {name: params[name] for name in self.names if name in params}
        raise ValueError(f"Unsupported body rule: {self.kind}")


NO_BODY = BodyRule()


def body_from_param(name: str) -> BodyRule:
    return BodyRule(kind="param", names=(name,))


def body_from_fields(*names: str) -> BodyRule:
    return BodyRule(kind="fields", names=names)


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    method: str
    path: Union[str, PathBuilder]
    params: Tuple[Param, ...] = ()
    requires_auth: bool = False
    body: BodyRule = NO_BODY

    @property
    def supports_testnet(self) -> bool:
        return any(param.name == TESTNET.name for param in self.params)

    @property
    def input_schema(self) -> Dict[str, Any]:
        return object_schema(self.params)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }