"""
JSON helpers for overlay models and decisions
"""

import json
import numpy as np
from enum import Enum
from typing import Any


def safe_json_convert(obj: Any) -> Any:
    """json.dumps fallback for models, enums and numpy values"""
    if hasattr(obj, 'to_dict'):
        return obj.to_dict()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, set):
        return sorted(obj)
    return str(obj)


def pretty_json(data: Any, indent: int = 2) -> str:
    """Pretty-printed JSON; model objects anywhere in data are serialized via to_dict"""
    return json.dumps(data, default=safe_json_convert, indent=indent)


def load_json(filepath: str) -> Any:
    """Load a decoded JSON document from disk"""
    with open(filepath, 'r') as f:
        return json.load(f)
