import json
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError # type: ignore

from autodiag.config import COMPONENT_CATALOG_PATH
from autodiag.errors import CatalogError
from autodiag.models.catalog import ComponentRecord


DEFAULT_CATALOG_PATH = Path(__file__).with_name("components.json")


def load_catalog(path: Optional[Path] = None) -> Tuple[ComponentRecord, ...]:
    """
    Read and validate a component catalog file.
    Returns an immutable tuple in file order.
    """
    path = Path(path) if path else DEFAULT_CATALOG_PATH

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read component catalog {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise CatalogError(f"Component catalog {path} must be a JSON array")

    try:
        components = tuple(ComponentRecord.model_validate(entry) for entry in raw)
    except ValidationError as exc:
        raise CatalogError(f"Invalid component in {path}: {exc}") from exc

    seen = set()
    for component in components:
        if component.id in seen:
            raise CatalogError(f"Duplicate component id {component.id!r} in {path}")
        seen.add(component.id)

    return components


COMPONENTS = load_catalog(COMPONENT_CATALOG_PATH)
