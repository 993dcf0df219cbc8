# svl.py
#
# Builds SVL 5.0 visualization sequences out of quiz sessions. Each engine
# records one or more deltas per accepted learner action; rejected actions
# leave the trace untouched.
import copy

from sortquiz.default_styles import DEFAULT_STYLES

SVL_VERSION = "5.0"


def update_style(indices, style_key):
    return {"op": "updateStyle", "params": {"indices": list(indices), "styleKey": style_key}}


def move_elements(pairs):
    return {"op": "moveElements", "params": {
        "pairs": [{"fromIndex": a, "toIndex": b} for a, b in pairs]
    }}


def update_values(values, indices):
    return {"op": "updateValues", "params": {
        "updates": [{"index": i, "value": values[i]} for i in indices]
    }}


def draw_temp(temp_type, value, style_key):
    return {"op": "drawTemp", "params": {"type": temp_type, "value": value, "styleKey": style_key}}


def remove_temp(temp_type):
    return {"op": "removeTemp", "params": {"type": temp_type}}


class SvlTrace:
    """
    Accumulates deltas for a single session and assembles the final SVL object.
    """

    def __init__(self, algorithm_name, variables_schema, pseudocode, initial_values, extra_info=None):
        self.algorithm_info = {"name": algorithm_name, "family": "Sorting"}
        if extra_info:
            self.algorithm_info.update(extra_info)
        self.variables_schema = variables_schema
        self.pseudocode = pseudocode
        self.initial_values = list(initial_values)
        self.deltas = []

    def add(self, meta, code_highlight, operations=()):
        self.deltas.append({
            "meta": dict(meta),
            "code_highlight": code_highlight,
            "operations": list(operations),
        })

    def initial_frame(self):
        return {
            "data_schema": {},
            "data_state": {
                "type": "array",
                "data": [
                    {"index": i, "value": val, "state": "idle"}
                    for i, val in enumerate(self.initial_values)
                ]
            },
            "variables_schema": self.variables_schema,
            "pseudocode": self.pseudocode,
            "code_highlight": 1,
            "styles": copy.deepcopy(DEFAULT_STYLES)
        }

    def to_svl(self):
        return {
            "svl_version": SVL_VERSION,
            "algorithm": dict(self.algorithm_info),
            "initial_frame": self.initial_frame(),
            "deltas": copy.deepcopy(self.deltas)
        }
