from taskmanager.main import main

main(prog_name="taskmanager")
