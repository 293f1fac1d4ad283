# skin_wellness/scoring/severity_scale.py
"""
Severity Scale
--------------
Maps a 0-10 visibility level to one of four display bands.

    level == 0     Optimal              #10B981  green
    1 <= level < 4 Needs Improvement    #34D399  light green
    4 <= level < 7 Attention Needed     #FBBF24  amber
    level >= 7     Focus Area           #EF4444  red
"""
from dataclasses import dataclass
from typing import Dict

from skin_wellness.models.enumerations import SeverityBand
from skin_wellness.scoring.utils import require_level

BAND_COLORS: Dict[SeverityBand, str] = {
    SeverityBand.OPTIMAL:           "#10B981",
    SeverityBand.NEEDS_IMPROVEMENT: "#34D399",
    SeverityBand.ATTENTION_NEEDED:  "#FBBF24",
    SeverityBand.FOCUS_AREA:        "#EF4444",
}


@dataclass(frozen=True)
class BandStyle:
    """Label and colour for one level."""
    band: SeverityBand
    label: str
    color: str


def band_for(level: int) -> BandStyle:
    """Return the band style for a level in [0, 10]."""
    require_level(level)

    if level == 0:
        band = SeverityBand.OPTIMAL
    elif level < 4:
        band = SeverityBand.NEEDS_IMPROVEMENT
    elif level < 7:
        band = SeverityBand.ATTENTION_NEEDED
    else:
        band = SeverityBand.FOCUS_AREA

    return BandStyle(band=band, label=band.value, color=BAND_COLORS[band])


def score_text(level: int) -> str:
    """Second line of a label pill, e.g. 'Attention Needed 5/10'."""
    return f"{band_for(level).label} {level}/10"
