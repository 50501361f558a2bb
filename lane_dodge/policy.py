LOOKAHEAD = 260


def policy(env):
    # Strategy: find the closest obstacle above the car whose span overlaps the car's
    # columns and that will arrive within the look-ahead window. Step to whichever
    # side has more road left; if neither threatens, hold the lane.
    snapshot = env.engine.snapshot()
    car = snapshot.vehicle
    config = env.config

    threats = [
        o for o in snapshot.obstacles
        if o.x < car.x + car.width and o.x + o.width > car.x
        and car.y - LOOKAHEAD < o.y + o.height <= car.y + car.height
    ]
    if not threats:
        return [0, 0, 0]

    nearest = max(threats, key=lambda o: o.y + o.height)
    room_left = nearest.x
    room_right = config.width - (nearest.x + nearest.width)

    if room_right >= room_left and car.x < config.vehicle_max_x:
        return [4, 0, 0]  # Move right
    if car.x > 0:
        return [3, 0, 0]  # Move left
    return [4, 0, 0]
