"""
detail_ui.py — Item Detail Page
--------------------------------

Shows a single catalog image with the descriptive sections found for it in
the detail dataset. The image path is handed over in
`st.session_state.detail_path` by the search and browse pages.

Dependencies:
- Streamlit for UI

Project: Field Guide
"""

import streamlit as st
from app.state import get_field_guide, image_source, init_session_state
from core.detail import NO_DETAIL_MESSAGE, build_detail_page
from core.errors import FieldGuideError

guide = get_field_guide()
init_session_state()
st.session_state.browse_category = None

path = st.session_state.detail_path
if not path:
    st.info("Select an item from Search or Browse to see its details.")
    st.stop()

try:
    data = guide.detail_cache.get()
except FieldGuideError:
    st.warning("Descriptive data is not available right now.")
    data = {}

page = build_detail_page(path, data)

st.header(page.heading)
img = image_source(page.image_path)
if img is not None:
    st.image(img, use_container_width=True)

if not page.found:
    st.write(NO_DETAIL_MESSAGE)
else:
    for section in page.sections:
        st.subheader(section.name)
        for item in section.items:
            st.markdown(f"#### {item.title}")
            if item.paragraphs:
                st.write("\n\n".join(item.paragraphs))
