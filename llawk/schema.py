#!/usr/bin/env python3
"""
Vendor-neutral JSON Schema nodes and their translation to vendor schemas.
"""

from __future__ import annotations

# Standard Library
import json
from dataclasses import dataclass, field

# PIP3 modules
from google.genai import types

# local repo modules
from .errors import SchemaError

#============================================


_GEMINI_TYPES: dict[str, types.Type] = {
	"string": types.Type.STRING,
	"number": types.Type.NUMBER,
	"integer": types.Type.INTEGER,
	"boolean": types.Type.BOOLEAN,
	"array": types.Type.ARRAY,
	"object": types.Type.OBJECT,
}


#============================================


@dataclass(frozen=True, slots=True)
class SchemaNode:
	"""
	One level of a JSON Schema document.

	Attributes:
		type: JSON Schema type tag ("string", "object", ...), may be empty.
		format: Optional format hint such as "date-time".
		description: Optional human description.
		nullable: Whether null is accepted.
		enum: Allowed string values.
		properties: Child schemas keyed by property name.
		required: Required property names, kept as given.
		items: Element schema for arrays.
	"""
	type: str = ""
	format: str = ""
	description: str = ""
	nullable: bool = False
	enum: list[str] = field(default_factory=list)
	properties: dict[str, SchemaNode] = field(default_factory=dict)
	required: list[str] = field(default_factory=list)
	items: SchemaNode | None = None

	#============================================
	@classmethod
	def from_dict(cls, data: dict) -> SchemaNode:
		"""
		Build a node tree from a decoded JSON object.

		Args:
			data: Decoded schema object.

		Returns:
			SchemaNode for the object and all of its children.
		"""
		if not isinstance(data, dict):
			raise SchemaError(f"schema node must be an object, got {type(data).__name__}")
		raw_properties = data.get("properties") or {}
		if not isinstance(raw_properties, dict):
			raise SchemaError("schema properties must be an object")
		properties = {
			name: cls.from_dict(child) for name, child in raw_properties.items()
		}
		raw_items = data.get("items")
		items = cls.from_dict(raw_items) if raw_items is not None else None
		type_tag = data.get("type", "")
		return cls(
			type=type_tag if isinstance(type_tag, str) else "",
			format=str(data.get("format") or ""),
			description=str(data.get("description") or ""),
			nullable=bool(data.get("nullable", False)),
			enum=[str(value) for value in data.get("enum") or []],
			properties=properties,
			required=[str(name) for name in data.get("required") or []],
			items=items,
		)


#============================================


def load_schema_object(text: str) -> dict:
	"""
	Decode schema text into a JSON object.
	"""
	try:
		data = json.loads(text)
	except json.JSONDecodeError as exc:
		raise SchemaError(f"Invalid schema: {exc}") from exc
	if not isinstance(data, dict):
		raise SchemaError("Invalid schema: top level must be a JSON object")
	return data


def parse_schema(text: str) -> SchemaNode:
	"""
	Parse schema text into a SchemaNode tree.

	Args:
		text: JSON Schema document.

	Returns:
		Root SchemaNode.
	"""
	return SchemaNode.from_dict(load_schema_object(text))


def is_json_schema(text: str) -> bool:
	"""
	Report whether text looks like a JSON Schema document.
	"""
	try:
		load_schema_object(text)
	except SchemaError:
		return False
	return True


#============================================


def to_gemini_schema(node: SchemaNode) -> types.Schema:
	"""
	Translate a SchemaNode into the Gemini schema representation.

	Unknown type tags become TYPE_UNSPECIFIED. Required names are copied
	without checking them against the properties.

	Args:
		node: Root of the vendor-neutral schema.

	Returns:
		Equivalent google.genai Schema.
	"""
	fields: dict[str, object] = {
		"type": _GEMINI_TYPES.get(node.type, types.Type.TYPE_UNSPECIFIED),
	}
	if node.format:
		fields["format"] = node.format
	if node.description:
		fields["description"] = node.description
	if node.nullable:
		fields["nullable"] = True
	if node.enum:
		fields["enum"] = list(node.enum)
	if node.properties:
		fields["properties"] = {
			name: to_gemini_schema(child) for name, child in node.properties.items()
		}
	if node.required:
		fields["required"] = list(node.required)
	if node.items is not None:
		fields["items"] = to_gemini_schema(node.items)
	return types.Schema(**fields)
