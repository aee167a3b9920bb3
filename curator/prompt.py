"""
Prompt builder.

build_prompt(query, mode, filters) returns the user message sent to the
model; SYSTEM_PROMPT is sent alongside it as the system message. Both are
pure text: the query is interpolated verbatim.
"""

from curator.config import MAX_RESULTS
from curator.models import Filters, Mode

SYSTEM_PROMPT = (
    "You are a professional media curator. "
    "Given a work or a concept, you propose works from other media that share "
    "its thematic DNA, and you answer with a single JSON object only."
)

INPUT_RULES = """\
[Reading the input]
First decide whether the input is a specific work (a title) or a concept,
vibe or aesthetic.
- Title: identify its series, media type and main theme. Exclude every work
  of the same series and the same primary genre. Propose works from
  DIFFERENT genres and media that share its thematic DNA.
- Concept: identify what it stands for and propose masterpieces that embody
  it, across media (film, books, art and photography, history, music,
  design). Reference material such as photo books is welcome here."""

NARRATIVE_RULES = """\
[Selection rules: NARRATIVE mode]
The user is looking for stories.
Never select art books, photo books, music videos or soundtracks.
Only select works with a clear story: novels, manga, films, dramas."""

VISUAL_RULES = """\
[Selection rules: VISUAL mode]
The user is looking for atmosphere and imagery.
Prefer art books, photo books, music videos and films known for their
visuals over plot-driven works."""

ANALYSIS_RULES = """\
[Writing the analysis]
Match the angle of the analysis to the medium of each work.
- Novels, films, manga: explain the structure of the story and the depth of
  its themes.
- Art books, photo books, music videos: never invent a plot. Describe the
  visual tone, colour, composition, atmosphere and what makes it a source of
  imagination."""

TONE_RULES = """\
[Tone matching]
Judge whether the input is serious, dark or philosophical, or pop, light,
comedic or cute. Every proposed work must share a similar tone."""

CONSTRAINTS = f"""\
[Strict requirements]
- Output exactly {MAX_RESULTS} items, no more and no less.
- Never propose sequels, prequels, spin-offs or remakes.
- Write every description and every tag in Japanese."""

OUTPUT_SCHEMA = """\
[Response format: JSON]
{
  "input_analysis_tags": ["タグ1", "タグ2", "タグ3"],
  "results": [
    {
      "title_ja": "作品名",
      "title_en": "English Title",
      "creator": "author / director / artist",
      "media_type": "媒体名（例: 画集、SF小説、MV）",
      "analysis": "媒体に合わせた魅力の解説（100文字程度）",
      "structural_insight": "客観的分析",
      "match_tags": ["タグ1", "タグ2"]
    }
  ]
}"""

FILTER_LABELS = {
    "media_type":  "Media type",
    "era_vibe":    "Era / vibe",
    "niche_level": "Niche level",
    "scope":       "Time / scope",
}


def _filter_block(filters: Filters | None) -> str:
    """Lines for non-default filters only; empty string when there are none."""
    if filters is None:
        return ""
    active = filters.active()
    if not active:
        return ""
    lines = ["[Filter constraints]"]
    for name, value in active.items():
        lines.append(f"- {FILTER_LABELS[name]}: {value}")
    if "media_type" in active:
        lines.append(
            "  (Book includes novels, art books and photo books; "
            "Movie includes films, dramas and music videos.)"
        )
    return "\n".join(lines)


def build_prompt(query: str, mode: Mode | str, filters: Filters | None = None) -> str:
    mode = Mode(mode)
    mode_rules = NARRATIVE_RULES if mode is Mode.NARRATIVE else VISUAL_RULES

    blocks = [f'User input: "{query}"', INPUT_RULES, mode_rules]
    filter_block = _filter_block(filters)
    if filter_block:
        blocks.append(filter_block)
    blocks += [ANALYSIS_RULES, TONE_RULES, CONSTRAINTS, OUTPUT_SCHEMA]

    return "\n\n".join(blocks)
