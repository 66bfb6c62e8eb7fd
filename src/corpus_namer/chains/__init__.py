"""Transactional operations over contributor directories."""

from corpus_namer.chains.mutator import (
    AddResult,
    MutatorState,
    RemoveResult,
    TransactionalMutator,
)

__all__ = ["AddResult", "MutatorState", "RemoveResult", "TransactionalMutator"]
