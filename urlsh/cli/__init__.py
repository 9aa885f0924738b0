from urlsh.cli.app import main, run


__all__ = [
    'main',
    'run',
]
