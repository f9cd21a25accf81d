"""Browser-based web UI for WebOS.

This package provides a Flask application that drives a desktop from a
browser page.  It is an **optional** extra — install with::

    pip install py-webos[web]

The ``create_app`` factory in ``app.py`` starts a desktop and serves
the page plus a JSON API for windows, pointer events, terminals, and
files.
"""
