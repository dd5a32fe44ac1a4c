"""Choir attendance package.

Organised by feature modules (members, attendance, importing, stats, reports)
with a thin Flask controller layer over service/repository layers.
"""
