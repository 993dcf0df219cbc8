# default_styles.py
#
# SVL 5.0 style library for quiz traces and card rendering.
# Every prompt state key produced by the engines must exist in elementStyles.

DEFAULT_STYLES = {

  "elementStyles": {
    "idle":        {"fill": "#FFFFFF", "stroke": "#424242", "strokeWidth": 1.5},
    "compare":     {"fill": "#FFECB3", "stroke": "#FFB300", "strokeWidth": 2},
    "sorted":      {"fill": "#C8E6C9", "stroke": "#2E7D32", "strokeWidth": 1.5},
    "swapping":    {"fill": "#FFCDD2", "stroke": "#D32F2F", "strokeWidth": 2.5},
    "key_element": {"fill": "#D1F2EB", "stroke": "#009688", "strokeWidth": 2.5},
    "placeholder": {"fill": "#F5F5F5", "stroke": "#BDBDBD"},
    "clickable":   {"fill": "#E3F2FD", "stroke": "#1976D2", "strokeWidth": 2}
  },

  "variableStyles": {
    "default_pointer": {"color": "#D32F2F", "shape": "arrow"},
    "default_value":   {"color": "#212121"}
  },

  "tempStyles": {
    "key_holder_box": {"fill": "#F3E5F5", "stroke": "#8E24AA"}
  },

  "animationStyles": {
      "default_move": {"type": "ease-in-out", "duration": 500}
  }
}

# Colours for instruction text, keyed by message tone.
MESSAGE_COLORS = {
    "normal": "#16a085",
    "error": "#e74c3c",
    "success": "#2ecc71",
}
