"""YAML rule loader.

Parses rule documents of the form:

    rules:
      - name: age
        type: range
        params: {min: 0, max: 130}
        message: Age must be between 0 and 130
      - name: nickname
        type: minLength
        params: {length: 2}
        optional: true
        nilValid: true

The loader works on text only; reading the document is up to the caller.
"""

from typing import Any

import yaml

from validatedcell.rules.registry import RuleRegistry
from validatedcell.rules.types import RuleDefinition, ValidationRule


class RuleLoader:
    """Loads rule definitions from YAML text."""

    def parse(self, text: str) -> dict[str, RuleDefinition]:
        """Parse a YAML document into named rule definitions.

        Returns:
            Dict of rule name -> RuleDefinition, in document order

        Raises:
            ValueError: If the document or any entry is malformed
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid rules document: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict) or not isinstance(data.get("rules") or [], list):
            raise ValueError("Rules document must be a mapping with a 'rules' list")

        definitions: dict[str, RuleDefinition] = {}
        for index, entry in enumerate(data.get("rules") or []):
            definition = self._resolve_rule(index, entry)
            if definition.name in definitions:
                raise ValueError(f"Duplicate rule name '{definition.name}'")
            definitions[definition.name] = definition
        return definitions

    def build(self, text: str) -> dict[str, ValidationRule]:
        """Parse a YAML document and resolve each definition through the registry."""
        return {
            name: RuleRegistry.create(definition)
            for name, definition in self.parse(text).items()
        }

    def _resolve_rule(self, index: int, entry: Any) -> RuleDefinition:
        """Convert a rule entry dict to RuleDefinition."""
        if not isinstance(entry, dict):
            raise ValueError(f"Rule entry #{index} must be a mapping")
        if not entry.get("name"):
            raise ValueError(f"Rule entry #{index} has no name")
        return RuleDefinition.from_dict(entry)
