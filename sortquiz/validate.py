# validate.py
import json
import logging
from pathlib import Path

import jsonschema

logger = logging.getLogger(__name__)

_OPERATION = {
    "type": "object",
    "required": ["op", "params"],
    "properties": {
        "op": {"enum": ["updateStyle", "moveElements", "updateValues", "drawTemp", "removeTemp"]},
        "params": {"type": "object"}
    }
}

SVL_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["svl_version", "algorithm", "initial_frame", "deltas"],
    "properties": {
        "svl_version": {"const": "5.0"},
        "algorithm": {
            "type": "object",
            "required": ["name", "family"],
            "properties": {
                "name": {"type": "string"},
                "family": {"type": "string"}
            }
        },
        "initial_frame": {
            "type": "object",
            "required": ["data_schema", "data_state", "variables_schema", "pseudocode", "code_highlight", "styles"],
            "properties": {
                "data_state": {
                    "type": "object",
                    "required": ["type", "data"],
                    "properties": {
                        "type": {"const": "array"},
                        "data": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "required": ["index", "value", "state"],
                                "properties": {
                                    "index": {"type": "integer", "minimum": 0},
                                    "value": {"type": "integer"},
                                    "state": {"type": "string"}
                                }
                            }
                        }
                    }
                },
                "variables_schema": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name", "type"],
                        "properties": {
                            "name": {"type": "string"},
                            "type": {"enum": ["pointer", "value"]}
                        }
                    }
                },
                "pseudocode": {"type": "array", "items": {"type": "string"}},
                "code_highlight": {"type": "integer", "minimum": 1},
                "styles": {"type": "object", "required": ["elementStyles"]}
            }
        },
        "deltas": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["meta", "code_highlight", "operations"],
                "properties": {
                    "meta": {"type": "object"},
                    "code_highlight": {"type": "integer", "minimum": 1},
                    "operations": {
                        "type": "array",
                        "items": {
                            "anyOf": [
                                _OPERATION,
                                {"type": "array", "items": _OPERATION}
                            ]
                        }
                    }
                }
            }
        }
    }
}


def validate_svl(svl_object, schema=None):
    """Check an SVL object against the schema. Returns (ok, error message)."""
    try:
        jsonschema.validate(instance=svl_object, schema=schema or SVL_SCHEMA)
    except jsonschema.exceptions.ValidationError as e:
        return False, f"{e.message} (path: {list(e.path)})"
    return True, ""


def validate_svl_file(json_path, schema_path=None):
    """Validate an SVL JSON file. Falls back to the built-in schema when no schema file is given."""
    json_path = Path(json_path)
    logger.info("Validating %s", json_path.name)
    try:
        schema = json.loads(Path(schema_path).read_text(encoding='utf-8')) if schema_path else SVL_SCHEMA
        data = json.loads(json_path.read_text(encoding='utf-8'))
    except FileNotFoundError:
        logger.error("File not found: %s or %s", json_path, schema_path)
        return False
    except json.JSONDecodeError:
        logger.error("File content is not valid JSON: %s", json_path)
        return False

    ok, reason = validate_svl(data, schema)
    if ok:
        logger.info("%s conforms to SVL 5.0", json_path.name)
    else:
        logger.error("%s failed validation: %s", json_path.name, reason)
    return ok
