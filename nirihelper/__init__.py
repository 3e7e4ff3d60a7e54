"""nirihelper - higher-level window actions for the niri compositor.

Each invocation connects to niri's IPC socket, inspects the focused window
and output, and sends the few low-level actions needed to snap a floating
window to a screen edge, toggle follow mode or consume a window into the
column on its left.
"""
