"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "천구 탐험",
        "en": "Celestial Sphere",
    },
    "label_mode": {
        "ko": "문제 선택",
        "en": "Select Problem",
    },
    "mode_EXPLORE": {
        "ko": "구면 삼각형 탐험",
        "en": "Explore: spherical triangle",
    },
    "mode_EARTH": {
        "ko": "1. 면적 (지구)",
        "en": "1. Plane/Area (Earth)",
    },
    "mode_PZS": {
        "ko": "2. P-Z-S 변환",
        "en": "2. P-Z-S Transformation",
    },
    "mode_SUNRISE": {
        "ko": "3. 일출/대기차",
        "en": "3. Sunrise/Refraction",
    },
    "label_ra": {
        "ko": "적경 (h m s)",
        "en": "Right ascension (h m s)",
    },
    "label_dec": {
        "ko": "적위 (° ' \")",
        "en": "Declination (° ' \")",
    },
    "btn_add_point": {
        "ko": "꼭짓점 추가",
        "en": "Add vertex",
    },
    "btn_clear": {
        "ko": "지우기",
        "en": "Clear",
    },
    "label_angle_A": {
        "ko": "각 A (= B)",
        "en": "Angle A (= B)",
    },
    "label_side_a": {
        "ko": "변 a (= b)",
        "en": "Side a (= b)",
    },
    "label_latitude": {
        "ko": "위도",
        "en": "Latitude",
    },
    "label_declination": {
        "ko": "적위",
        "en": "Declination",
    },
    "label_hour_angle": {
        "ko": "시간각 (h)",
        "en": "Hour angle (h)",
    },
    "label_day": {
        "ko": "연중 일수",
        "en": "Day of year",
    },
    "label_time": {
        "ko": "지방시",
        "en": "Local time",
    },
    "result_sides": {
        "ko": "변 (도)",
        "en": "Sides (deg)",
    },
    "result_angles": {
        "ko": "각 (도)",
        "en": "Angles (deg)",
    },
    "result_degenerate": {
        "ko": "퇴화된 삼각형입니다. 꼭짓점이 겹치거나 한 대원 위에 있어요.",
        "en": "Degenerate triangle: vertices coincide or lie on one great circle.",
    },
    "result_add_more": {
        "ko": "꼭짓점 {count}/3 — 적경/적위를 입력해 추가하세요.",
        "en": "{count}/3 vertices. Enter RA/Dec to add more.",
    },
    "result_arc": {
        "ko": "호의 길이",
        "en": "Arc length",
    },
    "result_base": {
        "ko": "밑변 c",
        "en": "Base c",
    },
    "result_apex": {
        "ko": "꼭지각 C",
        "en": "Apex angle C",
    },
    "result_excess": {
        "ko": "구면 과잉",
        "en": "Spherical excess",
    },
    "result_area": {
        "ko": "면적",
        "en": "Area",
    },
    "result_unstable": {
        "ko": "A 또는 a가 90°에 가까워 정밀도가 떨어집니다.",
        "en": "A or a is close to 90°: results lose precision here.",
    },
    "result_needs_input": {
        "ko": "A와 a를 입력하세요.",
        "en": "Enter A and a.",
    },
    "result_altitude": {
        "ko": "고도",
        "en": "Altitude",
    },
    "result_azimuth": {
        "ko": "방위각",
        "en": "Azimuth",
    },
    "result_sun_dec": {
        "ko": "태양 적위",
        "en": "Sun declination",
    },
    "result_rise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "result_set": {
        "ko": "일몰",
        "en": "Sunset",
    },
    "result_day_length": {
        "ko": "낮의 길이",
        "en": "Day length",
    },
    "result_circumpolar": {
        "ko": "태양이 지지 않습니다 (백야).",
        "en": "The sun never sets (midnight sun).",
    },
    "result_never_rises": {
        "ko": "태양이 뜨지 않습니다 (극야).",
        "en": "The sun never rises (polar night).",
    },
    "error_config": {
        "ko": "설정 오류: {error}",
        "en": "Configuration error: {error}",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
