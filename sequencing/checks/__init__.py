"""Sanity checks on built trial sequences."""
