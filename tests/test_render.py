import json

import pytest

from palette_profile import analyze
from palette_profile.builder import ColorProfile
from palette_profile.categories import CATEGORIES
from palette_profile.dominant import DominantColor
from palette_profile.hue_histogram import HueBin
from palette_profile.render import (
    ChartEntry, chart_entries, render_html, render_text, text_color_for_background, to_json,
    wheel_segments,
)


def make_profile(distribution=None, bins=None, dominant=None, opaque=100):
    histogram = [HueBin() for _ in range(360)]
    for hue, b in (bins or {}).items():
        histogram[hue] = b
    category_distribution = dict.fromkeys(CATEGORIES, 0.0)
    category_distribution.update(distribution or {})
    return ColorProfile(
        dominant_colors=dominant or [],
        category_distribution=category_distribution,
        hue_histogram=histogram,
        total_pixels=opaque,
        opaque_pixels=opaque,
    )


@pytest.fixture
def red_profile():
    return analyze(bytes((200, 30, 30, 255)) * 100, 10, 10)


def test_chart_entries_single_family(red_profile):
    assert chart_entries(red_profile) == [ChartEntry('Reds', 100.0, '#ff6384')]


def test_chart_entries_threshold_is_strict():
    profile = make_profile({'blues': 0.5, 'greens': 0.6, 'grays': 98.9})
    labels = [e.label for e in chart_entries(profile)]
    assert labels == ['Greens', 'Grays']


def test_chart_entries_keep_category_order():
    profile = make_profile({'blacks': 50.0, 'reds': 20.0, 'browns': 30.0})
    labels = [e.label for e in chart_entries(profile)]
    assert labels == ['Reds', 'Browns', 'Blacks']


def test_wheel_segments_normalized_to_busiest_bin():
    profile = make_profile(bins={
        0: HueBin(100, 80.0, 5.0),
        180: HueBin(10, 40.0, 95.0),
        200: HueBin(25, 50.0, 50.0),
    })

    segments = wheel_segments(profile)

    assert [s.hue for s in segments] == [0, 180, 200]
    assert segments[0].extent == 1.0
    assert segments[1].extent == pytest.approx(0.4)
    assert segments[2].extent == 1.0
    # Lightness clamped to the visible range
    assert segments[0].lightness == 20
    assert segments[1].lightness == 80
    assert segments[2].lightness == 50.0


def test_wheel_segments_custom_scale():
    profile = make_profile(bins={10: HueBin(100, 50.0, 50.0), 20: HueBin(50, 50.0, 50.0)})
    segments = wheel_segments(profile, scale=1.0)
    assert [s.extent for s in segments] == [1.0, 0.5]


def test_wheel_segments_empty():
    assert wheel_segments(make_profile(opaque=0)) == []


def test_wheel_segment_hex():
    profile = make_profile(bins={120: HueBin(1, 100.0, 50.0)})
    assert wheel_segments(profile)[0].hex == '#00ff00'


def test_render_text(red_profile):
    text = render_text(red_profile)
    assert "DOMINANT COLORS:" in text
    assert "#c00000" in text
    assert "100.0%" in text
    assert "Reds" in text
    assert "HUE PEAKS:" in text


def test_render_text_empty():
    text = render_text(make_profile(opaque=0))
    assert "No opaque pixels" in text


def test_render_html(red_profile):
    html = render_html(red_profile, "photos/<red>&.png")

    assert html.startswith('<!DOCTYPE html>')
    assert "photos/&lt;red&gt;&amp;.png" in html
    assert "<red>" not in html
    assert "background:#c00000" in html
    assert "<svg" in html and "<polygon" in html
    assert "Reds" in html


def test_render_html_empty():
    html = render_html(make_profile(opaque=0), "empty.png")
    assert "No opaque pixels" in html
    assert "<svg" not in html


def test_to_json_round_trips_structure():
    profile = make_profile(
        {'reds': 100.0},
        bins={0: HueBin(4, 74.0, 45.0)},
        dominant=[DominantColor((192, 0, 0), 4, 100.0)],
        opaque=4,
    )

    data = json.loads(to_json(profile))

    assert data['dominant_colors'] == [
        {'color': [192, 0, 0], 'hex': '#c00000', 'count': 4, 'percentage': 100.0}
    ]
    assert data['category_distribution']['reds'] == 100.0
    assert data['hue_histogram'][0] == {'hue': 0, 'count': 4, 'saturation': 74.0, 'lightness': 45.0}
    assert len(data['hue_histogram']) == 360


def test_text_color_for_background():
    assert text_color_for_background((255, 255, 255)) == "#000"
    assert text_color_for_background((0, 0, 64)) == "#fff"
