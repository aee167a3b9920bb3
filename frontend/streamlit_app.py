"""
Streamlit frontend for SCHEMA.

Calls POST http://localhost:8000/generate (override with SCHEMA_API_URL) and
renders the results as one hero card plus a grid of up to four cards.
"""

import sys
from pathlib import Path

import requests
import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))

from curator.config import api_url
from curator.models import ERA_VIBES, MEDIA_TYPES, NICHE_LEVELS, SCOPES, Mode
from frontend.ui import filters_payload, render_grid, render_hero, render_tags, split_results

st.set_page_config(page_title="SCHEMA", layout="centered")
st.title("SCHEMA")
st.caption("Idea generation tool for creators.")

mode = st.radio(
    "Mode",
    [Mode.NARRATIVE.value, Mode.VISUAL.value],
    format_func=str.upper,
    horizontal=True,
)

query = st.text_input(
    "Title, concept or vibe",
    placeholder="e.g. AKIRA, Cyberpunk, 孤独",
)

with st.expander("Filters"):
    media_type  = st.radio("Media type", MEDIA_TYPES, horizontal=True)
    era_vibe    = st.radio("Era / vibe", ERA_VIBES, horizontal=True)
    niche_level = st.radio("Niche level", NICHE_LEVELS, horizontal=True)
    scope       = st.radio("Time", SCOPES, horizontal=True)

submitted = st.button("Search")


if submitted:
    if not query.strip():
        st.warning("Please enter a title or concept.")
    else:
        payload = {
            "q": query,
            "mode": mode,
            "filters": filters_payload(media_type, era_vibe, niche_level, scope),
        }

        with st.spinner("Architecting results…"):
            try:
                resp = requests.post(api_url(), json=payload, timeout=120)
                resp.raise_for_status()
                data = resp.json()
            except requests.exceptions.ConnectionError:
                st.error("Cannot reach the API. Start it with: python app/app.py")
                st.stop()
            except requests.exceptions.HTTPError as exc:
                st.error(f"API error: {exc}")
                st.stop()

        hero, grid = split_results(data.get("results", []))
        if hero is None:
            st.info("No results for this query.")
        else:
            render_tags(data.get("input_analysis_tags", []))
            render_hero(hero)
            render_grid(grid)
