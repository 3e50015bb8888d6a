"""Entity definitions: ORM record, response model, views and user-facing messages."""

from ..models import Child, Guardian, AuthorizedPerson, FinancialInformation, PersonalSituation, AdditionalData
from ..schemas.child import (
    ChildResponse,
    ChildWithGuardiansResponse,
    ChildWithAuthorizedPeopleResponse,
    ChildWithAdditionalDataResponse,
)
from ..schemas.guardian import (
    GuardianResponse,
    GuardianWithChildrenResponse,
    GuardianWithFinancialInformationResponse,
    GuardianWithPersonalSituationResponse,
)
from ..schemas.authorized_person import AuthorizedPersonResponse, AuthorizedPersonWithChildrenResponse
from ..schemas.records import FinancialInformationResponse, PersonalSituationResponse, AdditionalDataResponse
from .entity_service import EntityDefinition, EntityMessages, EntityView


def _messages(none_found: str, of_entity: str) -> EntityMessages:
    """Build the message set from the two French phrasings the messages vary on.

    Args:
        none_found: e.g. "Aucun enfant correspondant n'a été trouvé."
        of_entity: the entity with its article after "de", e.g. "de l'enfant", "du responsable"
    """
    return EntityMessages(
        not_found=none_found,
        mapping_failed=f"Erreur lors de la création {of_entity} : Le Mapping a échoué.",
        creation_failed=f"Échec de la création {of_entity}.",
        id_mismatch=f"L'identifiant {of_entity} ne correspond pas à celui de l'objet envoyé.",
        integrity_violation=f"Erreur lors de la création {of_entity} : une contrainte d'intégrité n'est pas respectée.",
        update_failed=f"Échec de la mise à jour {of_entity}.",
        update_conflict=f"Erreur lors de la mise à jour {of_entity} : une contrainte d'intégrité n'est pas respectée.",
        delete_conflict=f"Impossible de supprimer {of_entity} : des enregistrements y font encore référence.",
    )


CHILD = EntityDefinition(
    name="child",
    record_cls=Child,
    response_cls=ChildResponse,
    messages=_messages("Aucun enfant correspondant n'a été trouvé.", "de l'enfant"),
    views={
        "with-guardians": EntityView("get_with_guardians", ChildWithGuardiansResponse),
        "with-authorized-people": EntityView("get_with_authorized_people", ChildWithAuthorizedPeopleResponse),
        "with-additional-data": EntityView("get_with_additional_data", ChildWithAdditionalDataResponse),
    },
)

GUARDIAN = EntityDefinition(
    name="guardian",
    record_cls=Guardian,
    response_cls=GuardianResponse,
    messages=_messages("Aucun responsable correspondant n'a été trouvé.", "du responsable"),
    views={
        "with-children": EntityView("get_with_children", GuardianWithChildrenResponse),
        "with-financial-information": EntityView("get_with_financial_information", GuardianWithFinancialInformationResponse),
        "with-personal-situation": EntityView("get_with_personal_situation", GuardianWithPersonalSituationResponse),
    },
)

AUTHORIZED_PERSON = EntityDefinition(
    name="authorized_person",
    record_cls=AuthorizedPerson,
    response_cls=AuthorizedPersonResponse,
    messages=_messages("Aucune personne autorisée correspondante n'a été trouvée.", "de la personne autorisée"),
    views={
        "with-children": EntityView("get_with_children", AuthorizedPersonWithChildrenResponse),
    },
)

FINANCIAL_INFORMATION = EntityDefinition(
    name="financial_information",
    record_cls=FinancialInformation,
    response_cls=FinancialInformationResponse,
    messages=_messages("Aucune information financière correspondante n'a été trouvée.", "de l'information financière"),
)

PERSONAL_SITUATION = EntityDefinition(
    name="personal_situation",
    record_cls=PersonalSituation,
    response_cls=PersonalSituationResponse,
    messages=_messages("Aucune situation personnelle correspondante n'a été trouvée.", "de la situation personnelle"),
)

ADDITIONAL_DATA = EntityDefinition(
    name="additional_data",
    record_cls=AdditionalData,
    response_cls=AdditionalDataResponse,
    messages=_messages("Aucune donnée supplémentaire correspondante n'a été trouvée.", "de la donnée supplémentaire"),
)
