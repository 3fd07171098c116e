"""
Hazard Curve Service - Streamlit Frontend
Click a point on the map and plot its interpolated hazard curves

Run: streamlit run streamlit_app.py
Open: http://localhost:8501
Note: Make sure FastAPI backend is running on port 8000
"""

import streamlit as st
import folium
from streamlit_folium import st_folium
import pandas as pd
import requests
import os

# Configuration - Use environment variable for Docker, fallback to localhost for local dev
API_URL = os.getenv("API_URL", "http://localhost:8000")
MOUNT_PATH = os.getenv("MOUNT_PATH", "/ws/hazard")
CENTER = {"lat": 39.5, "lon": -98.35}  # Conterminous US

# Page config
st.set_page_config(
    page_title="Hazard Curves",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)


def query_curves(lat: float, lon: float, params: dict) -> dict:
    """Query API for hazard curves at a point."""
    query = {"latitude": lat, "longitude": lon}
    query.update({k: v for k, v in params.items() if v})
    try:
        response = requests.get(f"{API_URL}{MOUNT_PATH}/curve.json", params=query, timeout=10)
        return response.json()
    except Exception as e:
        return {"data": str(e), "metadata": {"status": "error"}}


def create_map(marker_lat: float = None, marker_lon: float = None) -> folium.Map:
    """Create map with the queried point marked."""
    m = folium.Map(location=[CENTER["lat"], CENTER["lon"]], zoom_start=4, tiles="CartoDB positron")

    if marker_lat is not None and marker_lon is not None:
        folium.Marker(
            location=[marker_lat, marker_lon],
            icon=folium.Icon(color="red", icon="map-marker", prefix="fa"),
            tooltip=f"Lat: {marker_lat:.4f}, Lon: {marker_lon:.4f}"
        ).add_to(m)

    return m


def curves_frame(curves: list) -> pd.DataFrame:
    """One column per spectral period, indexed by IML."""
    series = {}
    for curve in curves:
        label = curve["metadata"]["spectralPeriod"]
        points = curve["data"]
        series[label] = pd.Series([p["y"] for p in points], index=[p["x"] for p in points])
    frame = pd.DataFrame(series)
    frame.index.name = "IML (g)"
    return frame


def display_result(result: dict):
    """Plot curves or show the error message."""
    if result.get("metadata", {}).get("status") != "success":
        message = result.get("data") or result.get("detail", "Unknown")
        if "coverage" in str(message).lower() or "outside" in str(message).lower():
            st.warning("⚠️ Outside model coverage")
        else:
            st.error(f"❌ {message}")
        return

    curves = result["data"]
    st.caption(f"{len(curves)} curve(s) | {result['metadata']['date']}")
    st.line_chart(curves_frame(curves))

    with st.expander("Raw values"):
        st.dataframe(curves_frame(curves))


def main():
    if "point" not in st.session_state:
        st.session_state.point = None

    with st.sidebar:
        st.title("📈 Hazard Curves")
        st.markdown("---")

        params = {
            "edition": st.text_input("Edition", value="E2014"),
            "region": st.text_input("Region", value="COUS0P05"),
            "vs30": st.text_input("Vs30", value="760"),
            "spectralPeriod": st.text_input("Spectral period", value="", help="Leave empty for all"),
        }

        st.markdown("---")
        with st.expander("📝 Manual Input", expanded=st.session_state.point is None):
            input_lat = st.number_input("Latitude", value=35.0, format="%.4f", step=0.05)
            input_lon = st.number_input("Longitude", value=-118.0, format="%.4f", step=0.05)
            if st.button("🔍 Query", use_container_width=True, type="primary"):
                st.session_state.point = (input_lat, input_lon)

        st.markdown(f"[📚 API Docs]({API_URL}/docs)")

    col_map, col_result = st.columns([2, 3])

    with col_map:
        lat, lon = st.session_state.point or (None, None)
        map_data = st_folium(create_map(lat, lon), width=None, height=600, key="map",
                             returned_objects=["last_clicked"])

        click = map_data.get("last_clicked") if map_data else None
        if click:
            new_point = (round(click["lat"], 4), round(click["lng"], 4))
            if new_point != st.session_state.point:
                st.session_state.point = new_point
                st.rerun()

    with col_result:
        st.subheader("📊 Results")
        if st.session_state.point is None:
            st.info("Click on the map to query a hazard curve.")
        else:
            lat, lon = st.session_state.point
            with st.spinner("Interpolating..."):
                display_result(query_curves(lat, lon, params))


if __name__ == "__main__":
    main()
