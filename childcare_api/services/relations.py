"""
Relationship kinds handled by the link manager.

Each definition names the two key fields (Left is always the child), the
order in which endpoint existence is checked on creation, and the messages
returned to callers. Messages are part of the API contract.
"""
from dataclasses import dataclass
from typing import Type

from pydantic import BaseModel

from ..models import GuardianChild, AuthorizedPersonChild
from ..schemas.links import (
    LinkGuardianChildResponse,
    LinkAuthorizedPersonChildResponse,
)

LEFT_FIRST = "left_first"
RIGHT_FIRST = "right_first"


@dataclass(frozen=True)
class RelationMessages:
    left_not_found: str
    right_not_found: str
    conflict: str
    mapping_failed: str
    creation_failed: str
    update_not_found: str
    update_failed: str
    remove_not_found: str


@dataclass(frozen=True)
class RelationDefinition:
    name: str
    left_key: str
    right_key: str
    record_cls: Type
    response_cls: Type[BaseModel]
    messages: RelationMessages
    check_order: str = RIGHT_FIRST

    def __post_init__(self):
        if self.check_order not in (LEFT_FIRST, RIGHT_FIRST):
            raise ValueError(f"Unknown check order: {self.check_order}")


GUARDIAN_CHILD = RelationDefinition(
    name="guardian_child",
    left_key="child_id",
    right_key="guardian_id",
    record_cls=GuardianChild,
    response_cls=LinkGuardianChildResponse,
    check_order=RIGHT_FIRST,
    messages=RelationMessages(
        left_not_found="L'enfant spécifié n'existe pas.",
        right_not_found="Le responsable spécifié n'existe pas.",
        conflict="Ce lien existe déjà entre ce responsable et cet enfant.",
        mapping_failed="Erreur lors de la création du lien Responsable / Enfant : Le Mapping a échoué.",
        creation_failed="Échec de la création du lien Responsable / Enfant.",
        update_not_found="Aucun lien Responsable / Enfant trouvé à mettre à jour.",
        update_failed="Échec de la mise à jour du lien Responsable / Enfant.",
        remove_not_found="Aucun lien Responsable / Enfant trouvé à supprimer.",
    ),
)

AUTHORIZED_PERSON_CHILD = RelationDefinition(
    name="authorized_person_child",
    left_key="child_id",
    right_key="authorized_person_id",
    record_cls=AuthorizedPersonChild,
    response_cls=LinkAuthorizedPersonChildResponse,
    check_order=RIGHT_FIRST,
    messages=RelationMessages(
        left_not_found="L'enfant spécifié n'existe pas.",
        right_not_found="La personne autorisée spécifiée n'existe pas.",
        conflict="Ce lien existe déjà entre cette personne autorisée et cet enfant.",
        mapping_failed="Erreur lors de la création du lien Personne Autorisée / Enfant : Le Mapping a échoué.",
        creation_failed="Échec de la création du lien Personne Autorisée / Enfant.",
        update_not_found="Le lien Personne Autorisée / Enfant n'existe pas.",
        update_failed="Échec de la mise à jour du lien Personne Autorisée / Enfant.",
        remove_not_found="Le lien Personne Autorisée / Enfant n'existe pas.",
    ),
)
