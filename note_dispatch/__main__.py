from note_dispatch.cli import main

main()
