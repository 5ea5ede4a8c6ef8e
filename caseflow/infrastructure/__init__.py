"""
Infrastructure implementations: storage, exporters and diagram rendering.
"""
