from neocal.main import run

run()
