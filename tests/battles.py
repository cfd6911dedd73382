"""Reference battles shared by the test modules."""

MOVEMENT = """\
#########
#G..G..G#
#.......#
#.......#
#G..E..G#
#.......#
#.......#
#G..G..G#
#########
"""

CANONICAL = """\
#######
#.G...#
#...EG#
#.#.#G#
#..G#E#
#.....#
#######
"""

# (grid, full rounds, final healths in reading order, score)
OUTCOMES = [
    ("""\
#######
#G..#E#
#E#E.E#
#G.##.#
#...#E#
#...E.#
#######
""", 37, [200, 197, 185, 200, 200], 36334),
    ("""\
#######
#E..EG#
#.#G.E#
#E.##E#
#G..#.#
#..E#.#
#######
""", 46, [164, 197, 200, 98, 200], 39514),
    ("""\
#######
#E.G#.#
#.#G..#
#G.#.G#
#G..#.#
#...E.#
#######
""", 35, [200, 98, 200, 95, 200], 27755),
    ("""\
#######
#.E...#
#.#..G#
#.###.#
#E#G#G#
#...#G#
#######
""", 54, [200, 98, 38, 200], 28944),
    ("""\
#########
#G......#
#.E.#...#
#..##..G#
#...##..#
#...#...#
#.G...G.#
#.....G.#
#########
""", 20, [137, 200, 200, 200, 200], 18740),
]

# (grid, minimal elf power, full rounds, score)
LOSSLESS = [
    (CANONICAL, 15, 29, 4988),
    (OUTCOMES[1][0], 4, 33, 31284),
    (OUTCOMES[2][0], 15, 37, 3478),
    (OUTCOMES[3][0], 12, 39, 6474),
    (OUTCOMES[4][0], 34, 30, 1140),
]

LARGE = """\
################################
###############..........#######
######.##########G.......#######
#####..###..######...G...#######
#####..#...G..##........########
#####..G......#GG.......########
######..G..#G.......G....#######
########...###...#........######
######....G###.GG#.........#####
######G...####...#..........####
###.##.....G................####
###.......................#.####
##.......G....#####.......E.####
###.......G..#######....##E.####
####........#########..G.#.#####
#.#..##.....#########..#..######
#....####.G.#########......#####
#.##G#####..#########.....###.E#
###########.#########...E.E....#
###########..#######..........##
###########..E#####.......######
###########............E.#######
#########.E.....E..##.#..#######
#######.G.###.......E###########
######...#######....############
################...#############
###############....#############
###############...##############
#################.##############
#################.##############
#################.##############
################################
"""

WALLED_OFF = """\
#######
#E.#.G#
#######
"""
