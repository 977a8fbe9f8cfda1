from localekit.main import run

run()
