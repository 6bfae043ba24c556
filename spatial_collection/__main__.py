from spatial_collection.cli import app

app()
