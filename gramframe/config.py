"""
Global configuration dictionary and default parameters used across GramFrame.

Stores axis margins, zoom limits, hit-test tolerances, keyboard nudge steps
and the colour palette shared by the interaction engine and the Qt host.
"""

con_dict = {
    # axis margins around the image (surface units)
    "margin_left": 60.0,
    "margin_right": 15.0,
    "margin_top": 15.0,
    "margin_bottom": 50.0,

    # zoom controls
    "zoom_step": 1.5,
    "zoom_max": 10.0,
    "click_threshold": 5.0,

    # hit testing
    "tolerance_pixel_radius": 8.0,
    "tolerance_min_time": 0.01,
    "tolerance_min_freq": 1.0,
    "tolerance_max_time": 0.5,
    "tolerance_max_freq": 50.0,
    "analysis_pixel_radius": 16.0,
    "harmonics_pixel_radius": 10.0,
    "doppler_pixel_radius": 12.0,
    "doppler_marker_radius": 25.0,

    # harmonics
    "harmonic_min_spacing": 1.0,
    "harmonic_min_tolerance_hz": 20.0,
    "harmonic_tolerance_fraction": 0.1,
    "harmonic_line_fraction": 0.2,
    "harmonic_time_slack_fraction": 0.1,

    # keyboard nudge (pixels)
    "nudge_small": 1.0,
    "nudge_large": 5.0,

    # doppler
    "speed_of_sound": 1500.0,
    "ms_to_knots": 1.94384,

    # markers
    "marker_color": "#ff6b6b",
    "marker_size": 15.0,
}


harmonic_colors = [
    '#ff6b6b', '#2ecc71', '#f39c12', '#9b59b6',
    '#ffc93c', '#ff9ff3', '#45b7d1', '#e67e22',
]

def set_value(key, value):
    if key not in con_dict:
        raise KeyError(key)
    # naive cast
    ty = type(con_dict[key])
    con_dict[key] = ty(value)


def get_all():
    return con_dict


def get(key):
    return con_dict[key]
