"""Serialization helpers for API and CLI output."""

from pydantic import BaseModel

from kickprofile.models.result import BatchItem


def to_dict(model: BaseModel) -> dict:
    """
    Convert a model to a JSON-ready dictionary with camelCase keys.

    Args:
        model: Profile or MergedProfile

    Returns:
        Dictionary representation
    """
    return model.model_dump(mode="json", by_alias=True)


def to_json(model: BaseModel, indent: int | None = 2) -> str:
    """Serialize a model to a camelCase JSON string."""
    return model.model_dump_json(by_alias=True, indent=indent)


def batch_item_to_dict(item: BatchItem) -> dict:
    """Successful items carry data, failed items carry slug and error."""
    if item.ok and item.data is not None:
        return {"ok": True, "data": to_dict(item.data)}
    return {"ok": False, "slug": item.slug, "error": item.error}
