"""Adaptadores de I/O: API de PDF Otter (httpx), MongoDB (pymongo) y exportadores."""
