from .interactions import (
    InteractionsInput,
    InteractionsSummary,
    apply_document,
    assign_charges,
    read_interactions,
    read_interactions_string,
)
