"""Default category suggestions for the add-transaction flow."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import yaml

from models.transaction import Transaction, TransactionKind
from logger import get_logger

logger = get_logger()

DEFAULTS_FILE = Path(__file__).parent / "default_categories.yaml"


class CategoryDefaults:
    """Loads per-kind default category names from a YAML file.

    The file maps each kind ("income", "expense") to a list of names.
    Unknown kinds in the file are ignored; a kind missing from the file
    has no defaults.
    """

    def __init__(self, defaults_file: Optional[Path] = None):
        """Initialize the loader.

        Args:
            defaults_file: YAML file to read. Defaults to the bundled
                           default_categories.yaml.
        """
        self.defaults_file = defaults_file or DEFAULTS_FILE
        self._cache: Optional[Dict[TransactionKind, List[str]]] = None

    def load(self) -> Dict[TransactionKind, List[str]]:
        """Load and cache the defaults.

        Raises:
            FileNotFoundError: If the defaults file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            ValueError: If the file is not a mapping of kind to name list.
        """
        if self._cache is not None:
            return self._cache

        logger.debug(f"Loading category defaults from {self.defaults_file}")
        with open(self.defaults_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Category defaults must be a mapping: {self.defaults_file}"
            )

        defaults: Dict[TransactionKind, List[str]] = {}
        for kind in TransactionKind:
            names = data.get(kind.value) or []
            if not isinstance(names, list):
                raise ValueError(
                    f"Category defaults for '{kind.value}' must be a list"
                )
            defaults[kind] = [str(name).strip() for name in names if str(name).strip()]

        self._cache = defaults
        return defaults

    def for_kind(self, kind: TransactionKind) -> List[str]:
        return list(self.load().get(kind, []))


def suggested_categories(
    kind: TransactionKind,
    transactions: Sequence[Transaction],
    defaults: CategoryDefaults,
) -> List[str]:
    """Category names to offer for a new transaction of the given kind.

    Defaults for the kind come first, then custom categories already used
    with that kind, newest first, without duplicates.
    """
    used = [t.category for t in transactions if t.kind == kind]
    return list(dict.fromkeys(defaults.for_kind(kind) + used))
