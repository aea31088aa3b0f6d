"""
Business logic for listing, importing and reporting on records.

Services convert store failures into application exceptions.
"""
