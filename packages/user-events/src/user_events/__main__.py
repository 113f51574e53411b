from user_events.cli import main

main()
