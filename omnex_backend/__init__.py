"""
Omnex asset explorer backend: scanning, path resolution, query-state codec,
exporters and the aiohttp surface.
"""
