"""Bulls and Cows: minimax codebreaker, game API and CLI."""
