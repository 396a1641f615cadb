from importlib import metadata

def get_version():
    try:
        # Installed distribution metadata wins over the source tree
        return metadata.version("goup")
    except metadata.PackageNotFoundError:
        from goup import __version__
        return __version__
