"""
chart/ - Radial segmented chart

Modules:
    geometry.py         - Polar geometry engine (wedges, labels, buttons)
    scene.py            - Renderer-independent scene model and hit testing
    surface.py          - Interactive chart with single-slot selection
    plotly_renderer.py  - Plotly figure builder
"""
