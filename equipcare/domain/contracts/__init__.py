"""Contracts domain - equipment service contracts"""
