"""Reservation availability, conflict detection and floor-state logic"""
