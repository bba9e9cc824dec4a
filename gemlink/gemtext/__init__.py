"""Gemtext rendering package."""

from gemlink.gemtext.renderer import PLAIN, RenderedPage, Style, render

__all__ = ["render", "RenderedPage", "Style", "PLAIN"]
