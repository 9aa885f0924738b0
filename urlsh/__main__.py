from urlsh.cli import run


run()
