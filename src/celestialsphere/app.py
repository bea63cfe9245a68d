"""Celestial Sphere — Streamlit app for spherical astronomy problems.

Run with ``streamlit run src/celestialsphere/app.py``. Streamlit reruns this
script on every widget change, so the active mode is re-solved from scratch
each time; no derived astronomy state is kept between runs.
"""

import html
import logging

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from celestialsphere.config import ConfigError, load_config  # noqa: E402
from celestialsphere.coords import equatorial_to_direction  # noqa: E402
from celestialsphere.i18n import t  # noqa: E402
from celestialsphere.logging_config import setup_logging  # noqa: E402
from celestialsphere.modes import (  # noqa: E402
    MODES,
    EarthPayload,
    EarthRequest,
    ExplorePayload,
    ExploreRequest,
    ModePayload,
    ModeRequest,
    PZSPayload,
    PZSRequest,
    SunrisePayload,
    SunriseRequest,
    solve_mode,
)
from celestialsphere.renderers.plotly_3d import render_scene  # noqa: E402
from celestialsphere.sexagesimal import (  # noqa: E402
    format_degrees,
    format_dms,
    format_hms,
    format_hours,
    parse,
)
from celestialsphere.triangle import VertexSet  # noqa: E402

setup_logging(logging.INFO)
logger = logging.getLogger("celestialsphere.app")

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="wide",
)

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #050a1a !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    [data-testid="stSidebar"] {
        background-color: #0f172a !important;
    }
    .overlay-box {
        background: rgba(15, 23, 42, 0.85);
        border: 1px solid rgba(255,255,255,0.15);
        border-radius: 12px;
        padding: 1rem 1.4rem;
        color: #e8e8e8;
        font-family: ui-monospace, monospace;
        font-size: 0.9rem;
    }
    .overlay-box .warn { color: #fbbf24; }
    </style>
    """,
    unsafe_allow_html=True,
)

try:
    config = load_config()
except ConfigError as e:
    logger.error("invalid configuration: %s", e)
    st.error(t("error_config", _lang).format(error=html.escape(str(e))))
    st.stop()

# --- Session state initialization ---

if "vertices" not in st.session_state:
    st.session_state.vertices = VertexSet(radius=config.scene_radius)


def _sidebar_request(mode: str) -> ModeRequest:
    """Widgets for the active mode; returns the request they describe."""
    if mode == "EARTH":
        defaults = EarthRequest()
        return EarthRequest(
            A=st.text_input(t("label_angle_A", _lang), value=str(defaults.A)),
            a=st.text_input(t("label_side_a", _lang), value=str(defaults.a)),
        )

    if mode == "PZS":
        defaults = PZSRequest()
        return PZSRequest(
            latitude=st.text_input(
                t("label_latitude", _lang), value=str(defaults.latitude)
            ),
            declination=st.text_input(
                t("label_declination", _lang), value=str(defaults.declination)
            ),
            hour_angle=st.text_input(
                t("label_hour_angle", _lang), value=str(defaults.hour_angle)
            ),
        )

    if mode == "SUNRISE":
        defaults = SunriseRequest()
        return SunriseRequest(
            latitude=st.text_input(
                t("label_latitude", _lang), value=str(defaults.latitude)
            ),
            day_of_year=st.slider(
                t("label_day", _lang), 1, 365, value=defaults.day_of_year
            ),
            local_time=st.slider(
                t("label_time", _lang), 0.0, 24.0, value=defaults.local_time, step=0.25
            ),
        )

    ra = st.text_input(t("label_ra", _lang), value="0h 0m 0s")
    dec = st.text_input(t("label_dec", _lang), value="0")
    col_add, col_clear = st.columns(2)
    with col_add:
        if st.button(t("btn_add_point", _lang)):
            point = equatorial_to_direction(parse(ra), parse(dec), config.scene_radius)
            st.session_state.vertices = st.session_state.vertices.add_or_replace(point)
    with col_clear:
        if st.button(t("btn_clear", _lang)):
            st.session_state.vertices = st.session_state.vertices.clear()
    return ExploreRequest(vertices=st.session_state.vertices)


def _result_html(payload: ModePayload) -> str:
    """Result panel contents for a payload (already HTML-safe)."""
    if isinstance(payload, ExplorePayload):
        report = payload.report
        solution = report.solution
        if solution is None:
            rows = [t("result_add_more", _lang).format(count=report.vertex_count)]
            if report.arcs:
                rows.append(
                    f"{t('result_arc', _lang)}: {format_degrees(report.arcs[0].length)}"
                )
            return "<br>".join(rows)
        rows = [f"{t('result_sides', _lang)} / {t('result_angles', _lang)}"]
        for side, angle in zip("abc", "ABC"):
            rows.append(
                f"{side}: {solution.sides[side]:.1f}° &nbsp; "
                f"{angle}: {solution.angles[angle]:.1f}°"
            )
        rows.append(f"{t('result_excess', _lang)}: {format_degrees(solution.excess)}")
        if solution.degenerate:
            rows.append(f'<span class="warn">{t("result_degenerate", _lang)}</span>')
        return "<br>".join(rows)

    if isinstance(payload, EarthPayload):
        iso = payload.solution
        if iso is None:
            return t("result_needs_input", _lang)
        rows = [
            f"{t('result_base', _lang)}: {format_dms(iso.c)}",
            f"{t('result_apex', _lang)}: {format_dms(iso.C)}",
            f"{t('result_excess', _lang)}: {format_dms(iso.excess)}",
            f"{t('result_area', _lang)}: {iso.area:,.0f} km²",
        ]
        if iso.unstable:
            rows.append(f'<span class="warn">{t("result_unstable", _lang)}</span>')
        return "<br>".join(rows)

    if isinstance(payload, PZSPayload):
        position = payload.position
        return "<br>".join(
            [
                f"{t('result_altitude', _lang)}: {format_dms(position.altitude)}",
                f"{t('result_azimuth', _lang)}: {format_dms(position.azimuth)}",
            ]
        )

    assert isinstance(payload, SunrisePayload)
    rise_set = payload.rise_set
    rows = [f"{t('result_sun_dec', _lang)}: {format_dms(payload.declination)}"]
    if rise_set.degenerate:
        key = "result_circumpolar" if rise_set.circumpolar else "result_never_rises"
        rows.append(f'<span class="warn">{t(key, _lang)}</span>')
    else:
        rows += [
            f"{t('result_rise', _lang)}: {format_hms(12.0 + rise_set.rise_hour_angle)}",
            f"{t('result_set', _lang)}: {format_hms(12.0 + rise_set.set_hour_angle)}",
            f"{t('result_day_length', _lang)}: {format_hours(rise_set.day_length)}",
        ]
    return "<br>".join(rows)


with st.sidebar:
    mode = st.radio(
        t("label_mode", _lang),
        MODES,
        format_func=lambda m: t(f"mode_{m}", _lang),
        key="mode",
    )
    request = _sidebar_request(mode)

payload = solve_mode(request, config)

st.plotly_chart(
    render_scene(payload, config),
    use_container_width=True,
    config={"scrollZoom": True, "displayModeBar": False},
)
st.markdown(
    f'<div class="overlay-box">{_result_html(payload)}</div>',
    unsafe_allow_html=True,
)
