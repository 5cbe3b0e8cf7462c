"""
Team Matching Dashboard

A Streamlit application for forming case competition teams from a
registration roster and browsing the result.

Design: the same quiet palette as the reports
- Soft neutral background with a teal accent
- One card per team
- Warnings as banners above the results

Run with: streamlit run ui/app.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import json

import pandas as pd
import streamlit as st

from matchmaking.configs import MatchingConfig
from matchmaking.ingestion import create_synthetic_roster, parse_participants
from matchmaking.schema import MatchingResult, find_team
from matchmaking.service import process_team_matching

# =============================================================================
# DESIGN SYSTEM - Colors & Styles
# =============================================================================

COLORS = {
    "background": "#FAFAFA",
    "card_bg": "#FFFFFF",
    "text_primary": "#2D3748",
    "text_secondary": "#718096",
    "accent": "#319795",
    "accent_light": "#E6FFFA",
    "border": "#E2E8F0",
    "warning": "#ED8936",
    "error": "#F56565",
}


def inject_custom_css():
    """Inject custom CSS for cards and banners."""
    st.markdown(f"""
    <style>
        .stApp {{
            background-color: {COLORS['background']};
        }}

        h1, h2, h3 {{
            color: {COLORS['text_primary']} !important;
            font-weight: 600 !important;
        }}

        .team-card {{
            background: {COLORS['card_bg']};
            border: 1px solid {COLORS['border']};
            border-left: 4px solid {COLORS['accent']};
            border-radius: 12px;
            padding: 1rem 1.25rem;
            margin-bottom: 1rem;
        }}

        .team-card-header {{
            color: {COLORS['text_primary']};
            font-weight: 600;
            margin-bottom: 0.5rem;
        }}

        .team-card-meta {{
            color: {COLORS['text_secondary']};
            font-size: 0.85rem;
        }}

        .warning-banner {{
            background: #FEEBC8;
            border-left: 3px solid {COLORS['warning']};
            padding: 0.6rem 1rem;
            border-radius: 0 8px 8px 0;
            margin: 0.4rem 0;
        }}

        .warning-banner p {{
            color: {COLORS['text_primary']};
            margin: 0;
            font-size: 0.9rem;
        }}
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# COMPONENT FUNCTIONS
# =============================================================================

def render_header():
    """Render the page header."""
    st.markdown("""
    <div style="text-align: center; margin-bottom: 2rem;">
        <h1 style="font-size: 2.2rem; margin-bottom: 0.5rem;">Case Competition Team Matching</h1>
        <p style="font-size: 1.1rem; color: #718096; max-width: 640px; margin: 0 auto;">
            Participants are only placed in teams of their preferred size, with their own
            cohort and a compatible availability.
        </p>
    </div>
    """, unsafe_allow_html=True)


def render_sidebar() -> MatchingConfig:
    """Matching options. Returns the MatchingConfig to run with."""
    st.sidebar.header("Matching options")
    strict_availability = st.sidebar.checkbox(
        "Strict availability matching",
        value=True,
        help="Unchecked: availability only needs to fit one team member",
    )
    iterative = st.sidebar.checkbox(
        "Iterative matching",
        value=True,
        help="Re-run matching on whoever is still unmatched",
    )
    max_iterations = st.sidebar.number_input(
        "Max iterations (0 = automatic)", min_value=0, max_value=100, value=0, step=1
    )
    log_level = st.sidebar.selectbox("Diagnostics", ["minimal", "detailed", "verbose"], index=1)

    st.sidebar.caption(
        "Education separation and exact team size are always enforced."
    )
    return MatchingConfig(
        strict_availability_matching=strict_availability,
        use_iterative_matching=iterative,
        max_iterations=int(max_iterations) or None,
        log_level=log_level,
    )


def render_roster_input():
    """
    Roster source selection.

    Returns:
        Dict with either "csv_data" or "participants"/"parse_stats", or None
    """
    source = st.radio("Roster source", ["Upload CSV", "Synthetic roster"], horizontal=True)

    if source == "Upload CSV":
        uploaded = st.file_uploader("Registration export (.csv)", type=["csv"])
        if uploaded is None:
            return None
        return {"csv_data": uploaded.getvalue().decode("utf-8-sig")}

    col1, col2 = st.columns(2)
    with col1:
        n = st.number_input("Participants", min_value=2, max_value=500, value=40, step=1)
    with col2:
        seed = st.number_input("Seed", min_value=0, value=42, step=1)
    participants, parse_stats = parse_participants(create_synthetic_roster(int(n), seed=int(seed)))
    return {"participants": participants, "parse_stats": parse_stats}


def render_statistics(response: dict):
    """Headline numbers for the run."""
    stats = response["result"]["statistics"]
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Participants", stats["totalParticipants"])
    col2.metric("Teams formed", stats["teamsFormed"])
    col3.metric("Unmatched", len(response["result"]["unmatched"]))
    col4.metric("Efficiency", f"{stats['matchingEfficiency']:.1f}%")

    if stats["teamSizeDistribution"]:
        st.caption("Teams by size: " + ", ".join(
            f"{size}: {count}" for size, count in sorted(stats["teamSizeDistribution"].items())
        ))


def render_warnings(warnings):
    for warning in warnings:
        st.markdown(f"""
        <div class="warning-banner">
            <p>{warning}</p>
        </div>
        """, unsafe_allow_html=True)


def render_iterations(response: dict):
    """Per-round history of an iterative run."""
    iterative_stats = response.get("iterativeStats")
    if not iterative_stats:
        return
    with st.expander(f"Iteration history ({iterative_stats['totalIterations']} iterations)"):
        history = pd.DataFrame(iterative_stats["iterationBreakdown"])
        st.dataframe(history, use_container_width=True, hide_index=True)
        st.caption(
            f"Average iteration efficiency: {iterative_stats['averageIterationEfficiency']:.1f}%"
        )


def render_teams(result: MatchingResult):
    """One card per team with its members."""
    st.subheader("Teams")
    if not result.teams:
        st.info("No teams could be formed with the current roster.")
        return

    for team in result.teams:
        common = ", ".join(team.common_case_types) or "none"
        st.markdown(f"""
        <div class="team-card">
            <div class="team-card-header">{team.id} ({team.team_size} members)</div>
            <div class="team-card-meta">
                Compatibility {team.compatibility_score:.1f} |
                Avg. experience {team.average_experience:.2f} |
                Shared cases: {common}
            </div>
        </div>
        """, unsafe_allow_html=True)
        members = pd.DataFrame([{
            "Name": m.full_name,
            "College": m.college_name,
            "Year": m.current_year.value,
            "Availability": m.availability.value,
            "Experience": m.experience.value,
            "Team preference": m.team_preference.value,
        } for m in team.members])
        st.dataframe(members, use_container_width=True, hide_index=True)


def render_unmatched(result: MatchingResult):
    if not result.unmatched:
        return
    st.subheader(f"Unmatched participants ({len(result.unmatched)})")
    unmatched = pd.DataFrame([{
        "Name": p.full_name,
        "Email": p.email,
        "Preferred size": p.preferred_team_size,
        "Year": p.current_year.value,
        "Availability": p.availability.value,
        "Team preference": p.team_preference.value,
    } for p in result.unmatched])
    st.dataframe(unmatched, use_container_width=True, hide_index=True)


def render_lookup(result: MatchingResult):
    """Find the team of one participant by email."""
    email = st.text_input("Find a participant's team by email")
    if not email:
        return
    matches = [p for t in result.teams for p in t.members if p.email.lower() == email.strip().lower()]
    matches += [p for p in result.unmatched if p.email.lower() == email.strip().lower()]
    if not matches:
        st.warning("No participant with that email.")
        return
    team = find_team(result, matches[0].id)
    if team is None:
        st.info(f"{matches[0].full_name} is unmatched.")
    else:
        st.success(f"{matches[0].full_name} is in {team.id} with "
                   f"{', '.join(m.full_name for m in team.members if m.id != matches[0].id)}.")


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Team Matching",
        page_icon="",
        layout="wide",
    )

    inject_custom_css()
    render_header()

    config = render_sidebar()
    roster = render_roster_input()

    run_clicked = st.button("Form Teams", type="primary", disabled=roster is None)
    if run_clicked:
        with st.spinner("Forming teams..."):
            st.session_state["response"] = process_team_matching(config=config, **roster)

    response = st.session_state.get("response")
    if response is None:
        return

    if not response["success"]:
        st.error(f"{response['error']}: {response.get('details', '')}")
        return

    result = MatchingResult.from_dict(response["result"])

    render_statistics(response)
    render_warnings(response["warnings"])
    render_iterations(response)
    render_lookup(result)
    render_teams(result)
    render_unmatched(result)

    st.download_button(
        "Download results (JSON)",
        data=json.dumps(response, indent=2, ensure_ascii=False),
        file_name="matching_result.json",
        mime="application/json",
    )


if __name__ == "__main__":
    main()
