"""
Medical Code Extraction Pipeline

Batch ETL that converts two medical classification reference datasets into
flat CSV tables: ICD-10 diagnosis criteria from a JSON search catalogue and
ICD-O-3 topography/morphology combinations recovered from a PDF.
"""

__version__ = "0.1.0"
