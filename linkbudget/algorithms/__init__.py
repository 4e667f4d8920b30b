"""Link-budget algorithms: chain search, per-technology models, aggregation."""

from linkbudget.algorithms.chain import ChainState, chain_link_budget
from linkbudget.algorithms.chain_path import find_chain_path
from linkbudget.algorithms.direct import direct_link_budget

__all__ = [
    "find_chain_path",
    "direct_link_budget",
    "chain_link_budget",
    "ChainState",
]
