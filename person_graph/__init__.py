"""
Person graph: films and starships a person used, as a laid-out node/edge graph.
"""

__version__ = "0.1.0"
