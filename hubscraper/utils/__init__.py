"""
Utility helpers for the Hub Scraper
"""
