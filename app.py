from __future__ import annotations

from typing import Optional

import streamlit as st
from streamlit.components.v1 import html

from charts import build_heatmap_figure
from constants import DATASET_URL, STORAGE_MARKER, TITLE
from dataset import Dataset, export_dataset_as_csv, fetch_dataset, observations_frame
from heatmap import build_heatmap
from svg import render_html, render_svg


class _LoadFailed(Exception):
    pass


@st.cache_data(show_spinner="Loading temperature data...")
def _fetch_cached(url: str) -> Dataset:
    dataset = fetch_dataset(url)
    if dataset is None:
        # exceptions are never cached
        raise _LoadFailed(url)
    return dataset


def load_dataset(url: str) -> Optional[Dataset]:
    try:
        return _fetch_cached(url)
    except _LoadFailed:
        return None


def main() -> None:
    st.set_page_config(page_title="Heat Map", page_icon="🌡️", layout="wide")
    key, value = STORAGE_MARKER
    st.session_state[key] = value

    dataset = load_dataset(DATASET_URL)
    if dataset is None:
        # load failures are silent: nothing is drawn
        return

    instructions = build_heatmap(dataset)

    st.title(TITLE)
    st.caption(instructions.description.text)

    tabs = st.tabs(["Heat map", "SVG", "Data"])
    with tabs[0]:
        fig = build_heatmap_figure(instructions)
        st.plotly_chart(fig, use_container_width=False)

    with tabs[1]:
        surface = instructions.surface
        html(render_html(instructions), width=surface.outer_width, height=surface.outer_height + 20)
        st.download_button(
            "Download SVG",
            data=render_svg(instructions),
            file_name="heat-map.svg",
            mime="image/svg+xml",
        )

    with tabs[2]:
        st.subheader("Monthly variance")
        df = observations_frame(dataset)
        st.dataframe(df, use_container_width=True, hide_index=True)
        st.download_button(
            "Download observations CSV",
            data=export_dataset_as_csv(dataset),
            file_name="global-temperature.csv",
            mime="text/csv",
        )


if __name__ == "__main__":
    main()
