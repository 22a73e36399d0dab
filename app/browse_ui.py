"""
browse_ui.py — Category Image Galleries
----------------------------------------

This Streamlit page shows the image gallery of one category (Bugs, Animals,
Plants), four images per row with wrapped captions.

Entering a gallery, or switching category, rebuilds the category manifest
from the image folder when the app runs against local assets. Reruns of the
same category reuse it. Otherwise the existing manifest (or the built-in
list) is used.

Dependencies:
- Streamlit for UI

Project: Field Guide
"""

import streamlit as st
from app.state import get_field_guide, image_source, init_session_state, open_detail
from core.catalog import Category
from core.gallery import grid_rows

guide = get_field_guide()
init_session_state()

st.header("🗂️ Browse")

category = Category(st.radio("Category", [c.value for c in Category], horizontal=True))

with st.spinner("Loading images..."):
    items = guide.gallery.view(category, st.session_state.browse_category)
st.session_state.browse_category = category.value

if not items:
    st.warning(f"No images found for {category.value}. Run `python -m tools.manifest_builder {category.folder}` locally.")
else:
    st.caption(f"{len(items)} image(s)")
    for row_idx, row in enumerate(grid_rows(items)):
        cols = st.columns(4)
        for col_idx, item in enumerate(row):
            with cols[col_idx]:
                img = image_source(item.path)
                if img is not None:
                    st.image(img, use_container_width=True)
                st.text(item.name)
                if st.button("Details", key=f"browse_{row_idx}_{col_idx}"):
                    open_detail(item.path)
