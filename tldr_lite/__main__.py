from tldr_lite.main import run

run()
