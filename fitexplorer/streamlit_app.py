from __future__ import annotations

# Ensure the repository root is on sys.path so that absolute imports like `fitexplorer.*` work
# when Streamlit runs this file from within the package directory on cloud runtimes.
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import html
from typing import Any, List, Optional, Sequence

import streamlit as st

from fitexplorer.config import configure_logging, get_settings
from fitexplorer.models import ApiStatus, ExerciseRecord, FilterCriteria, ResultsCount
from fitexplorer.pipeline import ExplorerController
from fitexplorer.services.sorting import SORT_KEYS
from fitexplorer.ui.cards import ExerciseCard, capitalize_words, to_cards, to_detail
from fitexplorer.ui.theme import ThemeStore, resolve_theme, toggle_theme

st.set_page_config(page_title="FitExplorer", page_icon="🏋️", layout="wide")
settings = get_settings()
configure_logging(settings.LOG_LEVEL)

SORT_LABELS = {
    "name": "Name",
    "bodyPart": "Body Part",
    "equipment": "Equipment",
    "target": "Target Muscle",
}

STATUS_COLORS = {
    "success": ("#dcfce7", "#16a34a"),
    "error": ("#fee2e2", "#dc2626"),
    "loading": ("#fef9c3", "#ca8a04"),
}

# ========= Global CSS (APPLIES BEFORE ANY WIDGETS) =========
BASE_CSS = """
<style>
.ex-card{ padding: .25rem .1rem .5rem .1rem; }
.ex-title{ margin: .35rem 0 .25rem 0; font-weight: 700; font-size: 1.08rem; }
.ex-desc{ font-size: .85rem; opacity: .8; margin-bottom: .35rem; }
.chips{ display:flex; flex-wrap:wrap; gap:6px; margin-top:4px; }
.chip{ font-size: 12px; padding: 2px 8px; border-radius: 999px; background: rgba(59,130,246,.12); }
.chip.more{ background: transparent; opacity: .7; }
.badge{ font-size: 12px; padding: 2px 10px; border-radius: 999px; color: #fff; display:inline-block; margin-right:4px; }
.steps{ font-size: .8rem; margin-top: .35rem; }
.steps .more{ color: #d97706; font-weight: 600; }
.api-status{ font-size: 13px; padding: 3px 12px; border-radius: 999px; display:inline-block; }
.no-matches{ color: #ea580c; }
</style>
"""

DARK_CSS = """
<style>
.stApp{ background: #111827; color: #f3f4f6; }
div[data-testid="stVerticalBlockBorderWrapper"]{ background: #1f2937; border-color: #374151 !important; }
</style>
"""

BADGE_HEX = {
    "green": "#22c55e",
    "yellow": "#eab308",
    "red": "#ef4444",
    "gray": "#6b7280",
    "black": "rgba(0,0,0,.6)",
    "blue": "#3b82f6",
}


def _esc(s: Any) -> str:
    return html.escape(str(s))


def _system_prefers_dark() -> bool:
    ctx = getattr(st, "context", None)
    theme = getattr(ctx, "theme", None)
    return getattr(theme, "type", None) == "dark"


def card_html(card: ExerciseCard) -> str:
    badges = f"<span class='badge' style='background:{BADGE_HEX['blue']}'>{_esc(card.body_part.label)}</span>"
    if card.difficulty:
        badges += f"<span class='badge' style='background:{BADGE_HEX[card.difficulty.color]}'>{_esc(card.difficulty.label)}</span>"
    if card.category:
        badges += f"<span class='badge' style='background:{BADGE_HEX['black']}'>{_esc(card.category.label)}</span>"
    out = f"<div class='ex-card'><div>{badges}</div><div class='ex-title'>{_esc(card.title)}</div>"
    if card.description:
        out += f"<div class='ex-desc'>{_esc(card.description)}</div>"
    out += f"<div><b>Target:</b> {_esc(card.target)}</div>"
    if card.secondary_muscles:
        chips = "".join(f"<span class='chip'>{_esc(m)}</span>" for m in card.secondary_muscles)
        if card.more_muscles:
            chips += f"<span class='chip more'>+{card.more_muscles} more</span>"
        out += f"<div class='chips'>{chips}</div>"
    out += f"<div><b>Equipment:</b> {_esc(card.equipment)}</div>"
    if card.steps:
        steps = "".join(f"<div>{_esc(s)}</div>" for s in card.steps)
        if card.more_steps:
            steps += f"<div class='more'>+{card.more_steps} more steps...</div>"
        out += f"<div class='steps'>{steps}</div>"
    return out + "</div>"


@st.dialog("Exercise details", width="large")
def show_exercise_details(ex: ExerciseRecord) -> None:
    d = to_detail(ex)
    st.subheader(d.title)
    tags = []
    if d.difficulty:
        tags.append(f"<span class='badge' style='background:{BADGE_HEX[d.difficulty.color]}'>{_esc(d.difficulty.label)}</span>")
    if d.category:
        tags.append(f"<span class='badge' style='background:{BADGE_HEX['gray']}'>{_esc(d.category.label)}</span>")
    if tags:
        st.markdown("".join(tags), unsafe_allow_html=True)
    if d.description:
        st.write(d.description)
    st.image(d.image_url, width="stretch")
    c1, c2, c3 = st.columns(3)
    c1.metric("Target", d.target)
    c2.metric("Body Part", d.body_part)
    c3.metric("Equipment", d.equipment)
    if d.secondary_muscles:
        st.markdown("**Secondary muscles**")
        st.markdown("".join(f"<span class='chip'>{_esc(m)}</span> " for m in d.secondary_muscles), unsafe_allow_html=True)
    st.markdown("**Instructions**")
    if d.steps:
        st.markdown("\n".join(f"{i + 1}. {s}" for i, s in enumerate(d.steps)))
    else:
        st.info(d.instructions_notice)


class StreamlitSink:
    """Draws controller output into placeholders bound for the current rerun."""

    def __init__(self) -> None:
        self.status_slot: Optional[Any] = None
        self.count_slot: Optional[Any] = None
        self.grid_slot: Optional[Any] = None

    def bind(self, status_slot: Any = None, count_slot: Any = None, grid_slot: Any = None) -> None:
        self.status_slot = status_slot
        self.count_slot = count_slot
        self.grid_slot = grid_slot

    def render_status(self, status: ApiStatus) -> None:
        if self.status_slot is None:
            return
        bg, fg = STATUS_COLORS[status.kind]
        self.status_slot.markdown(
            f"<div style='text-align:right'><span class='api-status' style='background:{bg};color:{fg}'>{_esc(status.message)}</span></div>",
            unsafe_allow_html=True,
        )

    def render_counts(self, counts: ResultsCount) -> None:
        if self.count_slot is None:
            return
        if counts.no_matches:
            self.count_slot.markdown(f"<span class='no-matches'>{_esc(counts.message)}</span>", unsafe_allow_html=True)
        else:
            self.count_slot.caption(counts.message)

    def render_exercises(self, exercises: Sequence[ExerciseRecord]) -> None:
        if self.grid_slot is None:
            return
        with self.grid_slot.container():
            cards = to_cards(list(exercises))
            grid_cols = st.columns(3)
            for i, (ex, card) in enumerate(zip(exercises, cards)):
                with grid_cols[i % 3]:
                    with st.container(border=True):
                        st.image(card.image_url, width="stretch")
                        st.markdown(card_html(card), unsafe_allow_html=True)
                        if st.button("🔍 Details", key=f"details-{i}-{ex.id}", width="stretch"):
                            show_exercise_details(ex)


def get_controller() -> ExplorerController:
    if "controller" not in st.session_state:
        sink = StreamlitSink()
        st.session_state["controller"] = ExplorerController(sink=sink)
    return st.session_state["controller"]


def facet_select(label: str, options: List[str], key: str) -> str:
    return st.selectbox(
        label,
        [""] + options,
        key=key,
        format_func=lambda s: capitalize_words(s) if s else f"All {label.lower()}",
    )


# ----- theme -----
theme_store = ThemeStore(settings.PREFS_PATH)
if "theme" not in st.session_state:
    st.session_state["theme"] = resolve_theme(theme_store.load(), _system_prefers_dark())
st.markdown(BASE_CSS, unsafe_allow_html=True)
if st.session_state["theme"] == "dark":
    st.markdown(DARK_CSS, unsafe_allow_html=True)

controller = get_controller()
sink: StreamlitSink = controller.sink  # type: ignore[assignment]

# ----- header -----
title_col, status_col, help_col, theme_col = st.columns([6, 4, 1, 1])
with title_col:
    st.title("FitExplorer")
    st.caption("Browse the ExerciseDB catalog")
with status_col:
    status_slot = st.empty()
with help_col:
    with st.popover("ℹ️ How to use"):
        st.markdown(
            """
            - Type in the search box to match names, target muscles, equipment or body parts.
            - Narrow the list with the body part, equipment and target filters.
            - Change the sort order from the sidebar.
            - Open **Details** on any card for the full instructions.
            """
        )
with theme_col:
    icon = "☀️" if st.session_state["theme"] == "dark" else "🌙"
    if st.button(icon, key="btn-theme", help="Toggle dark mode"):
        st.session_state["theme"] = toggle_theme(st.session_state["theme"])
        theme_store.save(st.session_state["theme"])
        st.rerun()

# ----- initial load -----
sink.bind(status_slot=status_slot)
if controller.state.status is None:
    with st.spinner("Loading exercises from ExerciseDB…"):
        controller.load()

# ----- controls -----
facets = controller.facets
with st.sidebar:
    st.header("Search & filter")
    search_text = st.text_input("Search", key="search", placeholder="e.g. curl, abs, dumbbell")
    body_part = facet_select("Body parts", facets.body_parts, "f-body-part")
    equipment = facet_select("Equipment", facets.equipment, "f-equipment")
    target = facet_select("Target muscles", facets.targets, "f-target")
    sort_key = st.selectbox("Sort by", list(SORT_KEYS), key="sort", format_func=lambda k: SORT_LABELS[k])

controller.apply(
    FilterCriteria(search_text=search_text or "", body_part=body_part, equipment=equipment, target=target),
    sort_key,
)

count_slot = st.empty()
if controller.display_state == "error" and controller.state.last_error is not None:
    st.error(f"Could not load exercises: {controller.state.last_error.status_message}")
grid_slot = st.empty()
sink.bind(status_slot=status_slot, count_slot=count_slot, grid_slot=grid_slot)
controller.publish()
