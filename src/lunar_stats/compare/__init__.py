"""Cross-city comparison."""

from .cities import CityShare, CrossCityComparison, compare_cities

__all__ = ["CityShare", "CrossCityComparison", "compare_cities"]
