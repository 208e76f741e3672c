import numpy as np
import pytest

from palette_profile.categories import (
    CATEGORIES, CategoryTally, Classification, classify, classify_array, classify_hsl,
)


@pytest.mark.parametrize("hsl, expected", [
    # Lightness and saturation gates take priority over hue
    ((0, 0, 5), 'blacks'),
    ((120, 100, 9), 'blacks'),
    ((120, 100, 91), 'whites'),
    ((0, 0, 95), 'whites'),
    ((100, 5, 50), 'grays'),
    ((100, 9, 10), 'grays'),
    ((100, 50, 90), 'greens'),
    # Hue ranges
    ((0, 50, 50), 'reds'),
    ((29, 50, 50), 'reds'),
    ((30, 50, 50), 'oranges'),
    ((44, 50, 50), 'oranges'),
    ((45, 50, 50), 'yellows'),
    ((69, 50, 50), 'yellows'),
    ((70, 50, 50), 'greens'),
    ((149, 50, 50), 'greens'),
    ((150, 50, 50), 'blues'),
    ((210, 50, 50), 'purples'),
    ((280, 50, 50), 'pinks'),
    ((329, 50, 50), 'pinks'),
    ((330, 50, 50), 'reds'),
    ((359, 50, 50), 'reds'),
    ((360, 50, 50), 'reds'),
])
def test_classify_hsl(hsl, expected):
    assert classify_hsl(*hsl).final == expected


@pytest.mark.parametrize("hsl, primary, brown", [
    ((35, 50, 30), 'oranges', True),
    ((50, 50, 30), 'yellows', True),
    ((20, 50, 39), 'reds', True),
    ((69, 11, 10), 'yellows', True),
    ((19, 50, 30), 'reds', False),
    ((70, 50, 30), 'greens', False),
    ((35, 10, 30), 'oranges', False),  # saturation must exceed 10
    ((35, 50, 40), 'oranges', False),  # lightness must stay below 40
])
def test_brown_override_flag(hsl, primary, brown):
    result = classify_hsl(*hsl)
    assert result == Classification(primary, brown)
    assert result.final == ('browns' if brown else primary)


def test_dark_red_hues_move_to_browns_without_double_counting():
    # Hue 26 is primary-classified as reds but qualifies for browns. The
    # pixel counts once, under browns; reds and oranges are left untouched.
    tally = CategoryTally()
    tally.add(classify_hsl(26, 67, 24))

    assert tally.counts['browns'] == 1
    assert tally.counts['reds'] == 0
    assert tally.counts['oranges'] == 0
    assert tally.total == 1


def test_classify_rgb():
    assert classify(200, 30, 30) == 'reds'
    assert classify(101, 67, 33) == 'browns'
    assert classify(255, 255, 255) == 'whites'
    assert classify(128, 128, 128) == 'grays'
    assert classify(0, 0, 255) == 'purples'
    assert classify(0, 128, 255) == 'purples'
    assert classify(0, 200, 200) == 'blues'


def test_classify_array_matches_scalar():
    hues, sats, lights = [], [], []
    for h in range(0, 361):
        for s in (0, 5, 9, 10, 11, 50, 100):
            for l in (0, 9, 10, 39, 40, 50, 90, 91, 100):
                hues.append(h)
                sats.append(s)
                lights.append(l)

    indices = classify_array(np.array(hues), np.array(sats), np.array(lights))

    for i, (h, s, l) in enumerate(zip(hues, sats, lights)):
        assert CATEGORIES[indices[i]] == classify_hsl(h, s, l).final


def test_tally_percentages():
    tally = CategoryTally()
    tally.add_counts(np.array([CATEGORIES.index('reds')] * 3 + [CATEGORIES.index('blues')]))

    percentages = tally.percentages(tally.total)
    assert set(percentages) == set(CATEGORIES)
    assert percentages['reds'] == pytest.approx(75.0)
    assert percentages['blues'] == pytest.approx(25.0)
    assert sum(percentages.values()) == pytest.approx(100.0)


def test_tally_percentages_with_no_pixels():
    percentages = CategoryTally().percentages(0)
    assert percentages == dict.fromkeys(CATEGORIES, 0.0)


def test_tally_merge():
    a = CategoryTally()
    a.add(Classification('greens'))
    b = CategoryTally()
    b.add(Classification('greens'))
    b.add(Classification('yellows', True))

    merged = a.merge(b)
    assert merged.counts['greens'] == 2
    assert merged.counts['browns'] == 1
    assert merged.counts['yellows'] == 0
