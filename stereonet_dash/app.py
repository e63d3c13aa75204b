# app.py
import base64
import logging
from io import StringIO

import dash
from dash import dcc, html, Input, Output, State, ctx, no_update

from .data import load_measurements, read_measurements
from .errors import StereonetError
from .features import LINE, PLANE
from .layout import Container
from .logging_config import setup_logging
from .projection import point_to_line, pole_to_plane
from .stereonet import Stereonet

logger = logging.getLogger(__name__)

# -------------------------
# Layout constants
# -------------------------
CONTAINER_ID = 'stereo_graph'
NET_WIDTH = 700
RESIZE_POLL_MS = 1000
CONTROL_STYLE = {'padding': '10px', 'display': 'flex', 'gap': '8px', 'alignItems': 'center',
                 'flexWrap': 'wrap'}

# Reports the graph container's width whenever it changes
MEASURE_CONTAINER_JS = """
function(n_intervals, current) {
    var el = document.getElementById('stereo_container');
    if (!el) { return window.dash_clientside.no_update; }
    var width = Math.round(el.getBoundingClientRect().width);
    if (!width || width === current) { return window.dash_clientside.no_update; }
    return width;
}
"""


def make_layout(width, representation='arc', show_graticules=True):
    return html.Div([
        html.H3("Stereonet (equal-area, lower hemisphere)"),
        html.Div([
            dcc.Upload(id='upload_csv', children=html.Button('Browse…'), accept='.csv'),
            html.Div(id='load_status', style={'fontSize': '12px'}),
        ], style=CONTROL_STYLE),
        html.Div([
            html.Label("Dip (°)"),
            dcc.Input(id='dip_angle', type='number', min=0, max=90, value=30, style={'width': '80px'}),
            html.Label("Dip direction (°)"),
            dcc.Input(id='dip_direction', type='number', min=0, max=360, value=45,
                      style={'width': '80px'}),
            html.Button('Add plane', id='btn_add_plane', n_clicks=0),
            html.Button('Add line', id='btn_add_line', n_clicks=0),
        ], style=CONTROL_STYLE),
        html.Div([
            dcc.Dropdown(
                id='remove_kind',
                options=[{'label': 'Plane', 'value': PLANE}, {'label': 'Line', 'value': LINE}],
                value=PLANE,
                clearable=False,
                style={'width': '120px'},
            ),
            dcc.Input(id='remove_id', type='number', min=0, step=1, placeholder='id',
                      style={'width': '80px'}),
            html.Button('Remove', id='btn_remove', n_clicks=0),
        ], style=CONTROL_STYLE),
        html.Div([
            html.Label("Planes as"),
            dcc.RadioItems(
                id='representation',
                options=[{'label': 'Great circles', 'value': 'arc'},
                         {'label': 'Poles', 'value': 'pole'}],
                value=str(representation),
                inline=True,
            ),
            dcc.Checklist(
                id='graticules',
                options=[{'label': 'Graticule', 'value': 'show'}],
                value=['show'] if show_graticules else [],
                inline=True,
            ),
        ], style=CONTROL_STYLE),
        dcc.Store(id='container_width', data=width),
        dcc.Interval(id='resize_poll', interval=RESIZE_POLL_MS),
        html.Div(
            dcc.Graph(
                id=CONTAINER_ID,
                clear_on_unhover=True,
                config={'displayModeBar': False},
            ),
            id='stereo_container',
            style={'width': '100%', 'maxWidth': f'{NET_WIDTH}px'},
        ),
        html.Div(id='cursor_readout', style={'padding': '10px', 'fontSize': '12px'}),
    ])


def decode_upload(contents):
    header, b64 = contents.split(',', 1)
    decoded = base64.b64decode(b64)
    return read_measurements(StringIO(decoded.decode('utf-8', errors='replace')))


def create_app(stereonet=None, width=NET_WIDTH):
    """Dash app around one stereonet; a new net is built when none is given."""
    if stereonet is None:
        container = Container(CONTAINER_ID, width)
        stereonet = Stereonet(container=container)
    net = stereonet

    app = dash.Dash(__name__)
    app.layout = make_layout(net.width, net.plane_representation, net.graticules_visible)
    app.clientside_callback(
        MEASURE_CONTAINER_JS,
        Output('container_width', 'data'),
        Input('resize_poll', 'n_intervals'),
        State('container_width', 'data'),
    )
    hovered = {'handle': None}

    @app.callback(
        Output(CONTAINER_ID, 'figure'),
        Output('load_status', 'children'),
        Input('btn_add_plane', 'n_clicks'),
        Input('btn_add_line', 'n_clicks'),
        Input('btn_remove', 'n_clicks'),
        Input('upload_csv', 'contents'),
        Input('representation', 'value'),
        Input('graticules', 'value'),
        Input('container_width', 'data'),
        State('dip_angle', 'value'),
        State('dip_direction', 'value'),
        State('remove_kind', 'value'),
        State('remove_id', 'value'),
        State('upload_csv', 'filename'),
    )
    def update_figure(n_plane, n_line, n_remove, upload_contents, representation, graticules,
                      container_width, dip_angle, dip_direction, remove_kind, remove_id,
                      upload_filename):
        trigger = ctx.triggered_id
        status = no_update
        if hovered['handle'] is not None:
            net.hover_end(hovered['handle'])
            hovered['handle'] = None
        if trigger in ('btn_add_plane', 'btn_add_line'):
            if dip_angle is None or dip_direction is None:
                status = "Enter a dip and dip direction."
            else:
                add = net.add_plane if trigger == 'btn_add_plane' else net.add_line
                kind = PLANE if trigger == 'btn_add_plane' else LINE
                feature_id = add(dip_angle, dip_direction)
                if feature_id is None:
                    status = f"Skipped {kind} {dip_angle}/{dip_direction}: out of range."
                else:
                    status = f"Added {kind} {feature_id} ({dip_angle}/{dip_direction})."
        elif trigger == 'btn_remove':
            if remove_id is not None:
                if remove_kind == LINE:
                    net.remove_line(int(remove_id))
                else:
                    net.remove_plane(int(remove_id))
                status = f"Removed {remove_kind} {int(remove_id)}."
        elif trigger == 'upload_csv' and upload_contents:
            try:
                added = load_measurements(net, decode_upload(upload_contents), kind=None)
            except ValueError as exc:
                logger.warning("Load of %s failed: %s", upload_filename, exc)
                status = f"Load failed: {exc}"
            else:
                status = f"Loaded {upload_filename or 'uploaded file'} ({len(added)} features)"
        elif trigger == 'representation':
            try:
                net.set_plane_representation(representation)
            except StereonetError as exc:
                status = str(exc)
        elif trigger == 'graticules':
            net.toggle_graticules('show' in (graticules or []))
        elif trigger == 'container_width' and container_width:
            net.container.resize(min(container_width, NET_WIDTH))
        return net.figure, status

    @app.callback(
        Output(CONTAINER_ID, 'figure', allow_duplicate=True),
        Input(CONTAINER_ID, 'hoverData'),
        prevent_initial_call=True,
    )
    def on_hover(hover_data):
        handle = None
        if hover_data and hover_data.get('points'):
            handle = net.surface.handle_at(hover_data['points'][0].get('curveNumber', -1))
        if handle == hovered['handle']:
            return no_update
        if hovered['handle'] is not None:
            net.hover_end(hovered['handle'])
        hovered['handle'] = handle if handle is not None and net.hover(handle) else None
        return net.figure

    @app.callback(
        Output('cursor_readout', 'children'),
        Input(CONTAINER_ID, 'clickData'),
        prevent_initial_call=True,
    )
    def on_click(click_data):
        if not click_data or not click_data.get('points'):
            return no_update
        point = click_data['points'][0]
        plunge, trend = point_to_line(point['x'], point['y'], net.scale)
        dip, dip_direction = pole_to_plane(plunge, trend)
        return (f"Line {plunge:.1f}/{trend:.1f}; plane with this pole "
                f"{dip:.1f}/{dip_direction:.1f}")

    return app


def main():
    setup_logging()
    create_app().run(debug=True, port=8050)
