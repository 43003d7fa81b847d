"""
Pipeline Module for the Medical Code Extraction Pipeline

Contains the two extraction stages, run in this order by src.main:
- icdo3_extraction: ICD-O-3 site/type PDF to CSV
- icd10_extraction: ICD-10 catalogue JSON to CSV
"""

__all__ = []
