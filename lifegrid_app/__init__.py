"""Flask web app serving lifegrid wallpapers and previews."""
