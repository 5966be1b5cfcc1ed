"""
Benchmark suite for sakura parsing and rendering performance.

Compares sakura against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

All payloads are object-rooted, the only shape sakura documents take.
"""
