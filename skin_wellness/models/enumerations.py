from enum import Enum

class SeverityBand(str, Enum):
    OPTIMAL = "Optimal"                        # level 0
    NEEDS_IMPROVEMENT = "Needs Improvement"    # 1-3
    ATTENTION_NEEDED = "Attention Needed"      # 4-6
    FOCUS_AREA = "Focus Area"                  # 7-10

class ParameterScoreType(str, Enum):
    SEVERITY = "severity"          # lower is better, counts toward the aggregate
    CONDITIONAL = "conditional"    # "is the redness due to X" questions

class AggregationStrategy(str, Enum):
    MEAN = "mean"      # normalized average of all parameters
    WORST = "worst"    # weighted worst parameter wins

class EditorState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SAVED = "saved"
    CANCELLED = "cancelled"

class CloseSource(str, Enum):
    ICON = "icon"
    BACKDROP = "backdrop"

class TextAnchor(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"

class ChartTargetKind(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"
    DETAIL = "detail"
    LABEL = "label"
    PETAL = "petal"
    BACKGROUND = "background"
    CANVAS = "canvas"
