"""Rotatarr: plan one streaming subscription at a time."""
