"""
HTTP surface for the signing service (FastAPI).

Run:
    uvicorn server.app:app
"""
