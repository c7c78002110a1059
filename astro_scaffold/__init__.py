"""astro-scaffold: page, component and content generators for Astro monorepos."""

__version__ = "0.1.0"
