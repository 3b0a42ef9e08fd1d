"""Mutation input and payload type generation."""
from __future__ import annotations

from typing import Dict, List

from .config import FieldVisibility
from .core.models import Model
from .core.naming import to_input_name, to_singular, upper_first
from .sdl import render_block, to_sdl
from .types import CREATE, DELETE, MUTATION, UPDATE, TypeMapper

__all__ = ['INPUT_ID', 'InputGenerator', 'payload_name', 'mutation_input_name']

INPUT_ID = 'input InputID {\n  id: ID!\n}'

# GraphQL forbids types without fields
_PLACEHOLDER = '_: String'


def payload_name(mutation_name: str) -> str:
    return f"{mutation_name}Payload"


def mutation_input_name(mutation_name: str) -> str:
    return f"{mutation_name}Input"


class InputGenerator:
    """Derives ``XInput`` / ``editXInput`` and mutation argument/payload types."""

    def __init__(self, type_mapper: TypeMapper, visibility: FieldVisibility | None = None):
        self.type_mapper = type_mapper
        self.visibility = visibility or FieldVisibility.all()

    def eligible_attributes(self, model: Model) -> List[str]:
        return [
            name for name, attribute in model.attributes.items()
            if not attribute.private and self.visibility.is_enabled(model, name)
        ]

    def _input_fields(self, model: Model, names: List[str], action: str) -> Dict[str, str]:
        return {
            name: self.type_mapper.convert_type(
                model.attributes[name],
                model_name=model.global_id,
                attribute_name=name,
                root_type=MUTATION,
                action=action,
            )
            for name in names
        }

    def generate_input_model(self, model: Model, name: str, *, allow_ids: bool = False) -> str:
        """Render the create (``XInput``) and update (``editXInput``) input types of a model.

        ``allow_ids`` adds an optional ``id`` to the edit input, which lets
        repeatable components be updated in place.
        """
        input_name = to_input_name(name)
        names = self.eligible_attributes(model)
        if not names:
            create_body = _PLACEHOLDER
            edit_body = 'id: ID' if allow_ids else _PLACEHOLDER
        else:
            create_body = to_sdl(self._input_fields(model, names, ''))
            edit_fields = self._input_fields(model, names, UPDATE)
            if allow_ids:
                edit_fields = {'id': 'ID', **edit_fields}
            edit_body = to_sdl(edit_fields)
        return '\n\n'.join([
            render_block('input', input_name, create_body),
            render_block('input', f"edit{input_name}", edit_body),
        ])

    def generate_input_payload_arguments(self, model: Model, name: str, mutation_name: str, action: str) -> str:
        """Render the ``<mutation>Input`` argument type and ``<mutation>Payload`` type.

        Single types have no ``where`` argument; deleting a single type needs
        no input at all.
        """
        singular_name = to_singular(name)
        input_name = to_input_name(name)
        payload = render_block('type', payload_name(mutation_name), f"{singular_name}: {model.global_id}")

        if action == CREATE:
            args = f"data: {input_name}"
        elif action == UPDATE:
            args = f"data: edit{input_name}"
            if not model.is_single_type:
                args = f"where: InputID\n{args}"
        elif action == DELETE:
            if model.is_single_type:
                return payload
            args = 'where: InputID'
        else:
            raise ValueError(f"Unsupported mutation action '{action}' for {model.global_id}")
        return '\n\n'.join([render_block('input', mutation_input_name(mutation_name), args), payload])
