from word_games.app.entrypoint import main

main()
