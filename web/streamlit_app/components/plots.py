from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import streamlit as st

from src import InfluenceGraph, LayoutCache, build_pyvis_network, draw_path_matplotlib

logger = logging.getLogger(__name__)


def show_path_plot(
    graph: InfluenceGraph,
    path: Sequence[str] = (),
    title: Optional[str] = None,
    layout_cache: Optional[LayoutCache] = None,
    layout: str = "spring",
    use_container_width: bool = True,
) -> LayoutCache:
    """Render the graph with the route highlighted, matplotlib inside Streamlit."""
    fig, _, layout_cache_out = draw_path_matplotlib(
        graph,
        path=path,
        title=title,
        layout_cache=layout_cache,
        layout=layout,
        ax=None,
    )

    st.pyplot(fig, use_container_width=use_container_width)
    plt.close(fig)

    return layout_cache_out


def show_pyvis_network(
    graph: InfluenceGraph,
    path: Sequence[str] = (),
    height: int = 520,
    scrolling: bool = True,
) -> None:
    """Render a pyvis interactive network in Streamlit."""
    from streamlit.components.v1 import html as st_html

    net = build_pyvis_network(graph, path=path, height=f"{height - 20}px")

    with tempfile.NamedTemporaryFile(delete=False, suffix=".html") as tmp:
        tmp_path = Path(tmp.name)

    try:
        net.write_html(str(tmp_path))
        html_content = tmp_path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Interactive network could not be written: %s", exc)
        st.warning(
            f"PyVis network could not be written to HTML: {exc}. "
            "Use the static plot instead."
        )
        return
    finally:
        tmp_path.unlink(missing_ok=True)

    st_html(html_content, height=height, scrolling=scrolling)
