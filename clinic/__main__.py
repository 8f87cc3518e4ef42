from clinic.main import run

run()
