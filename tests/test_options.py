import pytest
from apple_maps.errors import InvalidOptionsError
from apple_maps.options import DEFAULT_OPTIONS, merge_options, zoom_preference


def test_defaults_are_accepted():
    _, accepted = merge_options({}, DEFAULT_OPTIONS)
    assert accepted == DEFAULT_OPTIONS


def test_merge_starts_from_defaults():
    merged, accepted = merge_options(None, {"mapType": 2})

    assert accepted == {"mapType": 2}
    assert merged["mapType"] == 2
    assert merged["compassEnabled"] is True


def test_merge_skips_invalid_keys_but_keeps_the_rest(caplog):
    current = dict(DEFAULT_OPTIONS)
    merged, accepted = merge_options(
        current,
        {"mapType": 7, "trafficEnabled": True, "padding": [1, 2, 3, 4, 5]},
    )

    assert accepted == {"trafficEnabled": True}
    assert merged["mapType"] == DEFAULT_OPTIONS["mapType"]
    assert merged["padding"] == DEFAULT_OPTIONS["padding"]
    assert "mapType" in caplog.text


def test_merge_does_not_mutate_current():
    current = {"padding": [0.0, 0.0, 0.0, 0.0]}
    merged, _ = merge_options(current, {"padding": [8, 8, 8, 8]})

    assert current == {"padding": [0.0, 0.0, 0.0, 0.0]}
    assert merged["padding"] == [8, 8, 8, 8]


def test_unknown_keys_pass_through():
    _, accepted = merge_options({}, {"customStyle": "dark"})
    assert accepted == {"customStyle": "dark"}


def test_non_mapping_update_is_rejected():
    with pytest.raises(InvalidOptionsError):
        merge_options({}, ["mapType", 1])


@pytest.mark.parametrize(
    "preference",
    [[None, None], [3, None], [None, 18.5], [2, 20]],
)
def test_min_max_preference_accepts_nullable_numbers(preference):
    _, accepted = merge_options({}, {"minMaxZoomPreference": preference})
    assert accepted == {"minMaxZoomPreference": preference}


@pytest.mark.parametrize("preference", [[3], [3, 4, 5], ["low", 10], 5])
def test_min_max_preference_rejects_other_shapes(preference):
    _, accepted = merge_options({}, {"minMaxZoomPreference": preference})
    assert accepted == {}


def test_wrongly_typed_flag_is_ignored():
    _, accepted = merge_options({}, {"compassEnabled": "yes"})
    assert accepted == {}


def test_zoom_preference():
    assert zoom_preference({}) == (None, None)
    assert zoom_preference({"minMaxZoomPreference": [4, None]}) == (4.0, None)
    assert zoom_preference({"minMaxZoomPreference": [None, 16]}) == (None, 16.0)
