"""
saastax.ui
~~~~~~~~~~
Optional web front-end (FastAPI + uvicorn). Install with ``pip install saastax[ui]``.
"""
