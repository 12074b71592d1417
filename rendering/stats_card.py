"""Stats card rendering - fixed-layout SVG.

Three columns, left to right:
- Total contributions with the overall contribution range
- Current streak (ring and flame icon) with its range
- Longest streak with its range
"""

import html
from datetime import date

from schemas import ContributionStats, DateRange

CARD_WIDTH = 495
CARD_HEIGHT = 195
EMPTY_LABEL = "–"

# Fixed English abbreviations so output does not depend on the process locale
_MONTH_ABBR = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_FONT = "'\"Segoe UI\", Ubuntu, sans-serif'"


def format_number(value: int | None) -> str:
    """Format with en-US thousands separators, e.g. 12,345."""
    return f"{value or 0:,}"


def _format_date(value: date, *, with_year: bool) -> str:
    label = f"{_MONTH_ABBR[value.month - 1]} {value.day}"
    if with_year:
        label = f"{label}, {value.year}"
    return label


def format_range(date_range: DateRange) -> str:
    """Format a range like 'Jan 5, 2024 - Mar 3'.

    The end year is shown only when it differs from the start year. Empty
    ranges render as an en dash.
    """
    if date_range.start is None or date_range.end is None:
        return EMPTY_LABEL

    same_year = date_range.start.year == date_range.end.year
    start = _format_date(date_range.start, with_year=True)
    end = _format_date(date_range.end, with_year=not same_year)
    return f"{start} - {end}"


def _text(
    x: float,
    y: float,
    content: str,
    *,
    size: int,
    weight: int = 400,
    fill: str = "#151515",
    style: str,
    comment: str,
    text_y: int = 32,
) -> str:
    return f"""
                <!-- {comment} -->
                <g transform='translate({x}, {y})'>
                    <text x='0' y='{text_y}' stroke-width='0' text-anchor='middle' fill='{fill}' stroke='none' font-family={_FONT} font-weight='{weight}' font-size='{size}px' font-style='normal' style='{style}'>
                        {html.escape(content)}
                    </text>
                </g>"""


def _fade(delay: float) -> str:
    return f"opacity: 0; animation: fadein 0.5s linear forwards {delay:.1f}s"


def _stat_column(x: float, number: str, label: str, caption: str, delay: float) -> str:
    """Big number, label and range caption for a side column."""
    return "".join(
        [
            _text(
                x,
                48,
                number,
                size=28,
                weight=700,
                style=_fade(delay),
                comment=f"{label} big number",
            ),
            _text(
                x,
                84,
                label,
                size=14,
                style=_fade(delay + 0.1),
                comment=f"{label} label",
            ),
            _text(
                x,
                114,
                caption,
                size=12,
                fill="#464646",
                style=_fade(delay + 0.2),
                comment=f"{label} range",
            ),
        ]
    )


def render_stats_card(stats: ContributionStats) -> str:
    """Generate the stats card SVG.

    Args:
        stats: Totals, streaks and ranges to display

    Returns:
        SVG content as a string
    """
    total_column = _stat_column(
        82.5,
        format_number(stats.total),
        "Total Contributions",
        format_range(stats.overall_range),
        delay=0.6,
    )
    longest_column = _stat_column(
        412.5,
        format_number(stats.longest_streak),
        "Longest Streak",
        format_range(stats.longest_range),
        delay=1.2,
    )

    current_labels = "".join(
        [
            _text(
                247.5,
                108,
                "Current Streak",
                size=14,
                weight=700,
                fill="#FB8C00",
                style=_fade(0.9),
                comment="Current Streak label",
            ),
            _text(
                247.5,
                145,
                format_range(stats.current_range),
                size=12,
                fill="#464646",
                style=_fade(0.9),
                text_y=21,
                comment="Current Streak range",
            ),
        ]
    )
    current_number = _text(
        247.5,
        48,
        format_number(stats.current_streak),
        size=28,
        weight=700,
        style="animation: currstreak 0.6s linear forwards",
        comment="Current Streak big number",
    )

    return f"""<svg xmlns='http://www.w3.org/2000/svg' xmlns:xlink='http://www.w3.org/1999/xlink'
                style='isolation: isolate' viewBox='0 0 {CARD_WIDTH} {CARD_HEIGHT}' width='{CARD_WIDTH}px' height='{CARD_HEIGHT}px' direction='ltr'>
        <style>
            @keyframes currstreak {{
                0% {{ font-size: 3px; opacity: 0.2; }}
                80% {{ font-size: 34px; opacity: 1; }}
                100% {{ font-size: 28px; opacity: 1; }}
            }}
            @keyframes fadein {{
                0% {{ opacity: 0; }}
                100% {{ opacity: 1; }}
            }}
        </style>
        <defs>
            <clipPath id='outer_rectangle'>
                <rect width='{CARD_WIDTH}' height='{CARD_HEIGHT}' rx='4.5'/>
            </clipPath>
            <mask id='mask_out_ring_behind_fire'>
                <rect width='{CARD_WIDTH}' height='{CARD_HEIGHT}' fill='white'/>
                <ellipse id='mask-ellipse' cx='247.5' cy='32' rx='13' ry='18' fill='black'/>
            </mask>
        </defs>
        <g clip-path='url(#outer_rectangle)'>
            <g style='isolation: isolate'>
                <rect stroke='#E4E2E2' fill='#FFFEFE' rx='4.5' x='0.5' y='0.5' width='494' height='194'/>
            </g>
            <g style='isolation: isolate'>
                <line x1='165' y1='28' x2='165' y2='170' vector-effect='non-scaling-stroke' stroke-width='1' stroke='#E4E2E2' stroke-linejoin='miter' stroke-linecap='square' stroke-miterlimit='3'/>
                <line x1='330' y1='28' x2='330' y2='170' vector-effect='non-scaling-stroke' stroke-width='1' stroke='#E4E2E2' stroke-linejoin='miter' stroke-linecap='square' stroke-miterlimit='3'/>
            </g>
            <g style='isolation: isolate'>{total_column}
            </g>
            <g style='isolation: isolate'>{current_labels}

                <!-- Ring around number -->
                <g mask='url(#mask_out_ring_behind_fire)'>
                    <circle cx='247.5' cy='71' r='40' fill='none' stroke='#FB8C00' stroke-width='5' style='{_fade(0.4)}'></circle>
                </g>
                <!-- Fire icon -->
                <g transform='translate(247.5, 19.5)' stroke-opacity='0' style='{_fade(0.6)}'>
                    <path d='M -12 -0.5 L 15 -0.5 L 15 23.5 L -12 23.5 L -12 -0.5 Z' fill='none'/>
                    <path d='M 1.5 0.67 C 1.5 0.67 2.24 3.32 2.24 5.47 C 2.24 7.53 0.89 9.2 -1.17 9.2 C -3.23 9.2 -4.79 7.53 -4.79 5.47 L -4.76 5.11 C -6.78 7.51 -8 10.62 -8 13.99 C -8 18.41 -4.42 22 0 22 C 4.42 22 8 18.41 8 13.99 C 8 8.6 5.41 3.79 1.5 0.67 Z M -0.29 19 C -2.07 19 -3.51 17.6 -3.51 15.86 C -3.51 14.24 -2.46 13.1 -0.7 12.74 C 1.07 12.38 2.9 11.53 3.92 10.16 C 4.31 11.45 4.51 12.81 4.51 14.2 C 4.51 16.85 2.36 19 -0.29 19 Z' fill='#FB8C00' stroke-opacity='0'/>
                </g>
{current_number}
            </g>
            <g style='isolation: isolate'>{longest_column}
            </g>
        </g>
    </svg>"""
