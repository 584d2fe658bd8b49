"""Pipeline module -- LangGraph search state machine and suggest flow."""

from src.pipeline.graph import build_default_graph, build_graph, run_search
from src.pipeline.state import SearchState
from src.pipeline.suggest import get_suggestions

__all__ = ["build_default_graph", "build_graph", "run_search", "SearchState", "get_suggestions"]
