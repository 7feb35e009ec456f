from word_games.app.entrypoint import compound_main

compound_main()
