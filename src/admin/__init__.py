"""
Admin product management: draft form state, colour variants and the
create/edit/delete workflow.
"""

from .draft import MAX_IMAGES, ProductDraft, reset_draft, validate_draft
from .variants import VariantEntry, VariantStore
from .workflow import ProductAdminWorkflow, WorkflowState

__all__ = [
    "ProductDraft",
    "reset_draft",
    "validate_draft",
    "MAX_IMAGES",
    "VariantEntry",
    "VariantStore",
    "ProductAdminWorkflow",
    "WorkflowState",
]
