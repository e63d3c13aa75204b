import pytest

from stereonet_dash import (
    ConfigurationError,
    Container,
    InvalidRepresentationError,
    Representation,
    Stereonet,
    StereonetOptions,
    StyleNotFoundError,
)


def test_requires_exactly_one_container(surface):
    with pytest.raises(ConfigurationError):
        Stereonet(surface=surface)
    container = Container("both", 400)
    with pytest.raises(ConfigurationError):
        Stereonet(selector="#both", container=container, surface=surface)
    with pytest.raises(ConfigurationError):
        Stereonet(selector="#missing-container", surface=surface)


def test_selector_resolves_registered_container(surface):
    container = Container("by-selector", 480)
    net = Stereonet(selector="#by-selector", surface=surface)
    assert net.container is container
    assert net.width == 480


def test_size_option_overrides_container_width(container, surface):
    net = Stereonet(container=container, surface=surface, size=900)
    assert net.width == net.height == 900


@pytest.mark.parametrize("options", [
    dict(size=0), dict(point_size=-1), dict(animations={"duration": -10}),
])
def test_invalid_options(container, surface, options):
    with pytest.raises(ConfigurationError):
        Stereonet(container=container, surface=surface, **options)


def test_options_object(container, surface):
    options = StereonetOptions(container=container, plane_representation="pole", animations=False)
    net = Stereonet(options, surface=surface)
    assert net.plane_representation == Representation.POLE
    assert options.animation_duration == 0


def test_invalid_initial_representation(container, surface):
    with pytest.raises(InvalidRepresentationError):
        Stereonet(container=container, surface=surface, plane_representation="dots")


def test_example_session(net):
    assert net.add_plane(30, 45) == 0
    assert net.add_plane(60, 90) == 1
    assert net.add_plane(83.2, 257) == 2
    assert net.add_line(83.2, 257) == 0
    assert net.add_line(60, 90) == 1
    assert net.add_plane(95, 45) is None
    assert [i for i, _ in net.get_planes()] == [0, 1, 2]


def test_style_merging(container, surface):
    net = Stereonet(container=container, surface=surface,
                    style={"data_plane": {"stroke": "#00f"}, "fold_axis": {"fill": "#0f0"}})
    assert net.get_style("data_plane") == {"stroke": "#00f"}
    assert net.get_style("fold_axis") == {"fill": "#0f0"}
    assert net.get_style("outline")["stroke"] == "#000"
    with pytest.raises(StyleNotFoundError):
        net.get_style("nope")


def test_style_string(net):
    assert net.style_string("crosshairs") == "stroke: #000; stroke-width: 1; fill: none;"
    net.set_style("crosshairs", {"stroke": "red"})
    assert net.style_string("crosshairs") == "stroke: red;"


def test_get_style_returns_copy(net):
    net.get_style("outline")["stroke"] = "pink"
    assert net.get_style("outline")["stroke"] == "#000"


def test_close_stops_following_container(net, container):
    net.close()
    container.resize(200)
    assert net.width == 600
    assert container.subscriber_count == 0
    net.resize(300)
    assert net.width == 300


def test_resize_without_width_uses_container(net, container):
    container.width = 420
    net.resize()
    assert net.width == 420


def test_hover_hooks(net, surface):
    net.add_plane(30, 45)
    (_, handle), = net.get_planes()
    kind, feature = net.hover(handle)
    assert kind == "plane" and feature.measurement.dip_angle == 30
    net.hover_end(handle)
    assert [event[0] for event in surface.hover_events] == ["over", "out"]
    assert net.hover("not-a-feature") is None
