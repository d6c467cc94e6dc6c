"""Crazy Solitaire: Klondike with jokers, a reverse-mode trigger and limited stock reloads."""
