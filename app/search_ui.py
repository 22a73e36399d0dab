"""
search_ui.py — Field Guide Keyword Search Interface
----------------------------------------------------

This Streamlit page provides free-text search over the field guide keyword
index (bugs, animals, plants).

Features:
- Accepts a free-text query (e.g. "bed bug", "itchy bites", "moskito")
- Optionally narrows the search to one category
- Ranks exact keyword hits, then alias hits, then fuzzy token matches
- Shows results four per row with their representative image
- Opens the detail page for a result
- Developer mode lists raw scores and match tiers

Dependencies:
- Streamlit for UI
- Pandas for the developer score table

Project: Field Guide
"""

import streamlit as st
import pandas as pd
from app.state import get_field_guide, image_source, init_session_state, open_detail
from core.catalog import Scope
from core.gallery import grid_rows
from core.service import SearchStatus

guide = get_field_guide()
init_session_state()
st.session_state.browse_category = None

st.header("🔎 Search")

# --- Search Inputs ---
scope_options = [s.value for s in Scope]
col1, col2 = st.columns([4, 1])
with col1:
    query = st.text_input("Search", value=st.session_state.search_query, placeholder="e.g. bed bug, itchy bites")
with col2:
    scope = st.selectbox("Scope", scope_options, index=scope_options.index(st.session_state.search_scope))

# --- Sidebar Search Options ---
with st.sidebar:
    st.header("Search Options")
    st.markdown("🛠️ Developer Settings")
    dev_mode = st.checkbox("Enable Developer Mode", value=False)

    if st.button("🔄 Reload Search Index"):
        guide.reload()
        st.success("Index, details and manifests will be reloaded.")

# --- Submit Search ---
if st.button("Submit Search"):
    st.session_state.search_submitted = True
    st.session_state.search_query = query
    st.session_state.search_scope = scope

# --- Run Search if Submitted ---
if st.session_state.search_submitted:
    with st.spinner("🔎 Searching..."):
        outcome = guide.search_service.run(st.session_state.search_query, Scope.parse(st.session_state.search_scope))

    if outcome.status is SearchStatus.EMPTY_QUERY:
        st.warning(outcome.message)
    elif outcome.status is SearchStatus.INDEX_UNAVAILABLE:
        st.warning(outcome.message)
    elif outcome.status is SearchStatus.NO_RESULTS:
        st.info(outcome.message)
    else:
        st.markdown(f"### Found {len(outcome.results)} matching entries for: *{st.session_state.search_query}*")

        # Developer Debug View
        if dev_mode:
            st.markdown("### 🛠️ Developer Mode")
            df = pd.DataFrame([
                {
                    "keyword": r.keyword,
                    "category": r.category.value,
                    "tier": r.match.tier.name,
                    "score": r.score,
                    "image": r.image
                }
                for r in outcome.results
            ])
            st.dataframe(df, use_container_width=True)

        # --- Result Grid ---
        for row_idx, row in enumerate(grid_rows(outcome.results)):
            cols = st.columns(4)
            for col_idx, result in enumerate(row):
                with cols[col_idx]:
                    img = image_source(result.image)
                    if img is not None:
                        st.image(img, use_container_width=True)
                    if st.button(result.keyword, key=f"result_{row_idx}_{col_idx}"):
                        open_detail(result.link_path(guide.image_dir))
