"""
Building Tour Solver - Dashboard
================================

Interactive front end for the exact building tour search.

Features:
- Load a location file or generate a random instance
- Tune parallelism, execution backend and missing-edge policy
- Per-partition minima table with the winner highlighted
- Duration matrix and timing overview
"""

import streamlit as st
import pandas as pd
import os
import sys
from typing import List, Optional

# Ensure the package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tour_solver import config, utils
from tour_solver.distance import MissingDistanceError
from tour_solver.io import generate_locations, parse_location_line
from tour_solver.models import Location, SolveResult
from tour_solver.permutation import count_orderings
from tour_solver.report import duration_matrix_frame, partitions_frame
from tour_solver.solver import TourSolver

# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="Building Tour Solver",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .kpi-card {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        border-radius: 16px;
        padding: 1.5rem;
        color: white;
        text-align: center;
        box-shadow: 0 10px 40px rgba(102, 126, 234, 0.3);
    }

    .kpi-card.green {
        background: linear-gradient(135deg, #11998e 0%, #38ef7d 100%);
    }

    .kpi-value {
        font-size: 2.2rem;
        font-weight: 800;
        margin: 0.5rem 0;
    }

    .kpi-label {
        font-size: 0.9rem;
        opacity: 0.9;
        text-transform: uppercase;
        letter-spacing: 1px;
    }

    .section-header {
        font-size: 1.5rem;
        font-weight: 700;
        color: #1a1a2e;
        margin: 2rem 0 1rem 0;
        padding-bottom: 0.5rem;
        border-bottom: 3px solid #667eea;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# =============================================================================
# DATA LOADING
# =============================================================================

def parse_uploaded(text: str, name: str) -> List[Location]:
    """Parse an uploaded location file."""
    return [
        parse_location_line(line, number, name)
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]


@st.cache_data(show_spinner=False)
def random_instance(count: int, seed: int, max_duration: int) -> List[Location]:
    """Generate and cache a random instance."""
    return generate_locations(count, seed=seed, max_duration=max_duration)


# =============================================================================
# SIDEBAR
# =============================================================================

def render_sidebar() -> Optional[dict]:
    """Render the sidebar configuration panel."""
    st.sidebar.markdown("## 🎛️ Configuration")
    st.sidebar.markdown("---")

    st.sidebar.markdown("### 📄 Locations")
    source = st.sidebar.radio("Source", ["Random instance", "Upload file"], index=0)

    locations: Optional[List[Location]] = None
    if source == "Upload file":
        uploaded = st.sidebar.file_uploader("Location file", type=["txt"])
        if uploaded is not None:
            try:
                locations = parse_uploaded(uploaded.getvalue().decode("utf-8"), uploaded.name)
            except ValueError as e:
                st.sidebar.error(f"Failed to load data: {e}")
                return None
    else:
        count = st.sidebar.slider("Locations", min_value=2, max_value=11, value=7)
        seed = st.sidebar.number_input("Seed", min_value=0, value=42, step=1)
        max_duration = st.sidebar.slider("Max duration", min_value=5, max_value=500, value=100, step=5)
        locations = random_instance(count, int(seed), max_duration)

    st.sidebar.markdown("---")
    st.sidebar.markdown("### ⚙️ Parameters")

    threads = st.sidebar.slider(
        "Partitions per wave",
        min_value=1,
        max_value=max(utils.available_parallelism(), 1),
        value=utils.available_parallelism(),
        help="Upper bound on second stops searched at once"
    )

    backend = st.sidebar.selectbox(
        "Backend",
        options=["thread", "process"],
        index=0 if config.EXECUTION_BACKEND == "thread" else 1,
        help="Worker threads share the table; worker processes run truly in parallel"
    )

    policy = st.sidebar.selectbox(
        "Missing durations",
        options=["zero", "raise"],
        index=0 if config.MISSING_EDGE_POLICY == "zero" else 1,
        help="Count an absent pair as 0, or stop the search"
    )

    if locations:
        st.sidebar.caption(
            f"{len(locations)} locations → {max(len(locations) - 1, 0)} partitions × "
            f"{count_orderings(len(locations)):,} tours"
        )

    st.sidebar.markdown("---")
    if st.sidebar.button("🚀 Solve", use_container_width=True):
        if not locations:
            st.sidebar.warning("Load at least one location first")
            return None
        return {"locations": locations, "threads": threads, "backend": backend, "policy": policy}

    return None


# =============================================================================
# RESULTS
# =============================================================================

def render_kpi_row(result: SolveResult) -> None:
    """Render the top KPI cards."""
    best_duration = result.best.duration if result.best else "N/A"
    col1, col2, col3, col4 = st.columns(4)

    cards = [
        (col1, "", "Best Duration", best_duration),
        (col2, "green", "Tours Evaluated", f"{result.tours_evaluated:,}"),
        (col3, "", "Per Wave / Waves", f"{result.threads_used} / {result.waves}"),
        (col4, "green", "Search Time", utils.format_elapsed_ms(result.search_ms)),
    ]
    for column, style, label, value in cards:
        with column:
            st.markdown(f"""
            <div class="kpi-card {style}">
                <div class="kpi-label">{label}</div>
                <div class="kpi-value">{value}</div>
            </div>
            """, unsafe_allow_html=True)


def render_partition_table(result: SolveResult) -> None:
    """Render every partition's best tour, winner highlighted."""
    st.markdown('<div class="section-header">📊 Partition Minima</div>', unsafe_allow_html=True)

    df = partitions_frame(result)
    if df.empty:
        st.info("Fewer than two locations: nothing to search.")
        return

    def highlight_winner(row: pd.Series) -> List[str]:
        """Style the winning partition's row."""
        style = 'background-color: #d4edda; font-weight: bold;' if row["Best"] else ''
        return [style] * len(row)

    st.dataframe(df.style.apply(highlight_winner, axis=1), use_container_width=True, hide_index=True)
    st.bar_chart(df.set_index("Second Stop")["Duration"])


def render_explainer() -> None:
    """Render the method explainer section."""
    with st.expander("How the Search Works", expanded=False):
        st.markdown("""
        The first location is the fixed start. Every other location is tried
        as the **second stop**, each in its own partition. A partition
        enumerates every ordering of the remaining locations with Heap's
        algorithm and keeps its shortest tour.

        Partitions run in **waves** of at most the chosen size. A wave starts
        only when the previous one has finished. The answer is the shortest
        of all partition minima.

        The search is exhaustive, so it always finds the optimum, at the
        price of (n - 2)! tours per partition.
        """)


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    st.markdown("""
    <div style="text-align: center; padding: 1rem 0 2rem 0;">
        <h1 style="font-size: 3rem; font-weight: 800;">Building Tour Solver</h1>
        <p style="font-size: 1.2rem; color: #666;">Exact minimum-duration tour by exhaustive search</p>
    </div>
    """, unsafe_allow_html=True)

    request = render_sidebar()

    if request is not None:
        solver = TourSolver(
            max_parallelism=request["threads"],
            backend=request["backend"],
            missing_edge_policy=request["policy"],
        )
        with st.spinner("Searching all tours... This may take a moment."):
            try:
                result = solver.solve(request["locations"])
            except MissingDistanceError as e:
                st.error(f"Incomplete distance table: {e}")
                return
        st.session_state["solve_result"] = result

    if "solve_result" not in st.session_state:
        st.markdown("---")
        st.info("👈 Choose locations and parameters in the sidebar, then click **Solve**.")
        render_explainer()
        return

    result: SolveResult = st.session_state["solve_result"]

    render_kpi_row(result)

    st.markdown("<br>", unsafe_allow_html=True)
    if result.best is not None:
        st.success(f"**Minimum traveling route:** {result.best.route} ({result.best.duration})")

    render_partition_table(result)

    st.markdown('<div class="section-header">🧮 Duration Matrix</div>', unsafe_allow_html=True)
    st.dataframe(duration_matrix_frame(result, result.table), use_container_width=True)

    render_explainer()


if __name__ == "__main__":
    main()
