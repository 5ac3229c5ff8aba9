"""Outbound guest messaging"""
