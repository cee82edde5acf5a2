"""solarbooks - quotations, GST invoicing and stock ledger for a solar EPC business."""

__version__ = "1.0.0"
