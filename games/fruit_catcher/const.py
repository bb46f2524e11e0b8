# Round
ROUND_LIMIT_SEC = 30.0             # seconds per round
FRUITS_NUM = 50                    # fruits spawned per round

# Falling fruits
FRUIT_SIZE = (60, 60)              # px
FRUIT_SPEED_MIN = 100              # px/s
FRUIT_SPEED_MAX = 300              # px/s
FRUIT_HEIGHT_MAX = 2000            # fruits start up to this far above the window

# Basket
BASKET_SIZE = (100, 100)           # px
BASKET_BOTTOM_OFFSET = 80          # basket top sits this far above the bottom edge

# HUD
HUD_COLOR = (255, 255, 255)
HUD_POS = (0, 0)
CLEAR_COLOR = (0, 0, 0)

SETUP_TEXT = (
    "Welcome to Fruit Catcher game.\n"
    "Click the 2 circles in the camera_input window.\n"
    "Click the circle on the left first,\n"
    "and then click the circle on the right."
)
START_TEXT = "Press space key to begin."
END_TEXT = "Game over! Your score is {score}!\nPress space key to play again."
