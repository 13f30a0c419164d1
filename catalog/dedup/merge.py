"""Merge policy for duplicate records."""

from catalog.domain.models import JobRecord

SALARY_FIELDS = ("salary_min", "salary_max", "salary_currency", "salary_type")
FILLABLE_FIELDS = ("experience_level", "contract_type")


def merge_records(primary: JobRecord, secondary: JobRecord) -> JobRecord:
    """Fold a secondary record's information into the primary.

    The result is a new record; neither input is modified. Identity, ``raw``
    and every field not listed below come from the primary.

    - Salary fields: primary's value unless it is null
    - tech_stack and tags: union of both
    - description: the longer non-null one (primary wins ties)
    - experience_level and contract_type: primary's value unless it is null

    Args:
        primary: Record whose identity is kept (usually the dedup survivor)
        secondary: Record contributing missing information

    Returns:
        Merged JobRecord that carries at least everything primary had
    """
    update = {}

    for name in SALARY_FIELDS + FILLABLE_FIELDS:
        if getattr(primary, name) is None and getattr(secondary, name) is not None:
            update[name] = getattr(secondary, name)

    tech_stack = primary.tech_stack | secondary.tech_stack
    if tech_stack != primary.tech_stack:
        update["tech_stack"] = tech_stack

    tags = primary.tags | secondary.tags
    if tags != primary.tags:
        update["tags"] = tags

    if secondary.description and len(secondary.description) > len(primary.description or ""):
        update["description"] = secondary.description

    if not update:
        return primary

    return primary.model_copy(update=update)
