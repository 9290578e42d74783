"""Equal-arc-length token placement around a rectangular board."""
