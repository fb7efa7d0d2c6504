from .payloads import (
    breakdown_to_dict,
    consolidated_invoice_payload,
    operation_invoice_payload,
    projection_report_payload,
    to_json,
)

__all__ = [
    "breakdown_to_dict",
    "consolidated_invoice_payload",
    "operation_invoice_payload",
    "projection_report_payload",
    "to_json",
]
