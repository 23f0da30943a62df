from stopwatch.main import run

run()
