"""Builders that turn YAML text into the node tree.

Parsing is a collaborator of validation, not part of it: anything that
produces ``yaml_schema.nodes`` trees can feed the pointer and the validator.
"""

from .yaml_parser import TreeBuilder, YamlParser, parse, yaml_parser

__all__ = ["TreeBuilder", "YamlParser", "parse", "yaml_parser"]
