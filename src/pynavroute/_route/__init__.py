"""Internal operations behind :class:`pynavroute.route.Route`.

Each module takes the route as its first argument and works on its
private state; the public surface stays on ``Route``.
"""
