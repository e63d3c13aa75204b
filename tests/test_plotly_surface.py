import pytest

from stereonet_dash import Container, Stereonet

BASE_TRACES = 6


@pytest.fixture
def plotly_net():
    container = Container("plotly-net", 600)
    return Stereonet(container=container, animations=False)


def test_reference_net_traces(plotly_net):
    fig = plotly_net.figure
    assert len(fig.data) == BASE_TRACES
    assert list(fig.layout.xaxis.range) == [-300, 300]
    assert list(fig.layout.yaxis.range) == [-300, 300]
    assert fig.layout.width == fig.layout.height == 600
    labels = [t for t in fig.data if t.mode == "text"]
    assert list(labels[0].text) == ["N", "E", "S", "W"]


def test_plane_is_a_line_trace_with_hover_text(plotly_net):
    plotly_net.add_plane(30, 45)
    (_, handle), = plotly_net.get_planes()
    trace = plotly_net.surface.trace(handle)
    assert trace.mode == "lines"
    assert trace.line.color == "#d14747"
    assert trace.line.width == 3
    assert trace.hovertext == "Dip: 30°, Dip Direction: 45°"
    assert plotly_net.figure.layout.hoverlabel.bgcolor == "rgba(0,0,0,0.7)"


def test_pole_representation_uses_markers(plotly_net):
    plotly_net.add_plane(30, 45)
    plotly_net.set_plane_representation("pole")
    assert len(plotly_net.figure.data) == BASE_TRACES + 1
    (_, handle), = plotly_net.get_planes()
    trace = plotly_net.surface.trace(handle)
    assert trace.mode == "markers"
    assert trace.marker.size == 10
    assert trace.x[0] < 0 and trace.y[0] < 0


def test_remove_deletes_trace(plotly_net):
    plotly_net.add_line(45, 336.6546)
    (_, handle), = plotly_net.get_lines()
    plotly_net.remove_line(0)
    assert len(plotly_net.figure.data) == BASE_TRACES
    assert handle not in plotly_net.surface
    plotly_net.surface.dispose_primitive(handle)


def test_hover_emphasis_and_restore(plotly_net):
    plotly_net.add_line(45, 10)
    plotly_net.add_plane(30, 45)
    (_, line_handle), = plotly_net.get_lines()
    (_, plane_handle), = plotly_net.get_planes()
    surface = plotly_net.surface

    plotly_net.hover(line_handle)
    assert surface.trace(line_handle).marker.size == pytest.approx(17)
    plotly_net.hover_end(line_handle)
    assert surface.trace(line_handle).marker.size == pytest.approx(10)

    plotly_net.hover(plane_handle)
    assert surface.trace(plane_handle).line.width == 10
    assert surface.trace(plane_handle).opacity == pytest.approx(0.6)
    plotly_net.hover_end(plane_handle)
    assert surface.trace(plane_handle).line.width == 3
    assert surface.trace(plane_handle).opacity == pytest.approx(1)


def test_handle_at_maps_curve_number(plotly_net):
    plotly_net.add_plane(30, 45)
    (_, handle), = plotly_net.get_planes()
    surface = plotly_net.surface
    assert surface.handle_at(len(plotly_net.figure.data) - 1) == handle
    assert surface.handle_at(999) is None


def test_animation_sets_transition():
    container = Container("animated-net", 400)
    net = Stereonet(container=container, point_size=4)
    net.add_line(30, 10)
    assert net.figure.layout.transition.duration == 300
    (_, handle), = net.get_lines()
    trace = net.surface.trace(handle)
    assert trace.opacity == 1
    assert trace.marker.size == 8


def test_resize_rebuilds_figure(plotly_net):
    plotly_net.add_plane(30, 45)
    plotly_net.add_line(30, 45)
    plotly_net.container.resize(300)
    fig = plotly_net.figure
    assert len(fig.data) == BASE_TRACES + 2
    assert list(fig.layout.xaxis.range) == [-150, 150]


def test_graticule_toggle_sets_trace_visibility(plotly_net):
    plotly_net.hide_graticules()
    hidden = [t for t in plotly_net.figure.data if t.visible is False]
    assert sorted(t.name for t in hidden) == ["graticule", "graticule_10_deg", "outline"]


def test_negative_curve_number_maps_to_nothing(plotly_net):
    plotly_net.add_plane(30, 45)
    assert plotly_net.surface.handle_at(-1) is None
    assert plotly_net.surface.handle_at(None) is None


def test_graticule_traces_precede_data_after_late_show():
    container = Container("late-grid", 600)
    net = Stereonet(container=container, show_graticules=False, animations=False)
    net.add_plane(30, 45)
    net.show_graticules()
    names = [t.name for t in net.figure.data]
    assert names.index("graticule") < names.index("data_plane")
    assert names[-1] == "data_plane"


def test_transition_is_cleared_by_later_updates():
    container = Container("transition-net", 400)
    net = Stereonet(container=container)
    net.add_line(30, 10)
    (_, handle), = net.get_lines()
    assert net.figure.layout.transition.duration == 300
    net.hover(handle)
    assert net.figure.layout.transition.duration == 0
