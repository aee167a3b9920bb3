"""
Rendering helpers for the Streamlit page.

split_results() and filters_payload() are plain functions; the render_*
functions draw into the current Streamlit container.
"""

from typing import Any

import streamlit as st

GRID_SIZE = 4

NO_VISUAL_HTML = (
    "<div style='aspect-ratio:3/4;background:#000;border:1px solid #1f2937;"
    "display:flex;align-items:center;justify-content:center;"
    "color:#374151;font-family:monospace;font-size:0.7rem;'>NO VISUAL</div>"
)

Result = dict[str, Any]


def split_results(results: list[Result]) -> tuple[Result | None, list[Result]]:
    """First result is the hero card, the next four go in the grid."""
    if not results:
        return None, []
    return results[0], results[1:1 + GRID_SIZE]


def filters_payload(media_type: str, era_vibe: str, niche_level: str, scope: str) -> dict[str, str]:
    return {
        "media_type": media_type,
        "era_vibe": era_vibe,
        "niche_level": niche_level,
        "scope": scope,
    }


def render_cover(item: Result) -> None:
    if item.get("image_url"):
        st.image(item["image_url"], width="stretch")
    else:
        st.markdown(NO_VISUAL_HTML, unsafe_allow_html=True)


def render_tags(tags: list[str]) -> None:
    if tags:
        st.caption("  ".join(f"`#{t}`" for t in tags))


def render_hero(item: Result) -> None:
    cover, body = st.columns([1, 3])
    with cover:
        render_cover(item)
    with body:
        if item.get("media_type"):
            st.caption(item["media_type"].upper())
        st.subheader(item.get("title") or "Untitled")
        if item.get("creator"):
            st.caption(item["creator"])
        st.write(item.get("analysis", ""))
        if item.get("structural_insight"):
            st.markdown("**FOCUS POINT**")
            st.markdown(f"_{item['structural_insight']}_")
        st.link_button("BUY", item["retail_url"])


def render_card(item: Result) -> None:
    with st.container(border=True):
        render_cover(item)
        if item.get("media_type"):
            st.caption(item["media_type"].upper())
        st.markdown(f"**{item.get('title') or 'Untitled'}**")
        if item.get("creator"):
            st.caption(item["creator"])
        st.write(item.get("analysis", ""))
        st.link_button("BUY", item["retail_url"], width="stretch")


def render_grid(items: list[Result]) -> None:
    for row_start in range(0, len(items), 2):
        cols = st.columns(2)
        for col, item in zip(cols, items[row_start:row_start + 2]):
            with col:
                render_card(item)
