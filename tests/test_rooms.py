"""Tests for room reveal, standee tiers and mid-round activation."""

from scenario_keeper.content.models import MonsterStandeeData, MonsterType, ScenarioData
from scenario_keeper.game.figures import Monster, ObjectiveContainer
from scenario_keeper.game.state import GameState, Scenario


def _monster(manager, name: str) -> Monster | None:
    return next((f for f in manager.game.figures if isinstance(f, Monster) and f.name == name), None)


def _room(scenario_data: ScenarioData, number: int):
    return next(room for room in scenario_data.rooms if room.room_number == number)


class TestStandeeTiers:
    """Tests for standee tier selection by party size."""

    def test_fixed_type_wins(self):
        """Test an explicit type ignores party size."""
        standee = MonsterStandeeData(name="x", type=MonsterType.BOSS, player2=MonsterType.NORMAL)
        assert standee.tier_for(2) == MonsterType.BOSS
        assert standee.tier_for(4) == MonsterType.BOSS

    def test_party_size_brackets(self):
        """Test <3, ==3 and >3 characters pick player2/3/4."""
        standee = MonsterStandeeData(
            name="x", player2=MonsterType.NORMAL, player3=MonsterType.ELITE, player4=MonsterType.BOSS
        )
        assert standee.tier_for(1) == MonsterType.NORMAL
        assert standee.tier_for(2) == MonsterType.NORMAL
        assert standee.tier_for(3) == MonsterType.ELITE
        assert standee.tier_for(4) == MonsterType.BOSS

    def test_no_tier(self):
        """Test a standee absent at this party size has no tier."""
        assert MonsterStandeeData(name="x", player3=MonsterType.NORMAL).tier_for(2) is None


class TestOpenRoom:
    """Tests for revealing rooms."""

    def test_initial_room_opens_on_start(self, manager, catalog):
        """Test starting a scenario reveals its initial room only."""
        manager.scenarios.set_scenario(catalog.get_scenario("gh", None, "1"))

        assert manager.game.scenario.revealed_rooms == [1]
        guard = _monster(manager, "bandit-guard")
        assert guard is not None
        assert [e.type for e in guard.entities] == [MonsterType.NORMAL]
        # The archer is not placed for two characters
        assert _monster(manager, "bandit-archer") is None

    def test_three_standees_two_characters(self, manager, catalog):
        """Test three untyped standees all use the two-player tier."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)

        bones = _monster(manager, "living-bones")
        assert [e.type for e in bones.entities] == [MonsterType.NORMAL] * 3
        assert [e.number for e in bones.entities] == [1, 2, 3]

    def test_four_characters_use_four_player_tier(self, manager, catalog, add_characters):
        """Test four characters pick the player4 tier."""
        add_characters("tinkerer", "scoundrel")
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)

        assert [e.type for e in _monster(manager, "living-bones").entities] == [MonsterType.ELITE] * 3
        assert [e.type for e in _monster(manager, "bandit-archer").entities] == [MonsterType.NORMAL]

    def test_room_objectives_bounds_checked(self, manager, catalog):
        """Test valid objective indexes spawn and out-of-range ones are skipped."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)

        objectives = [f for f in manager.game.figures if isinstance(f, ObjectiveContainer)]
        assert [o.name for o in objectives] == ["Altar"]
        assert objectives[0].health == 5

    def test_unknown_monster_skipped(self, manager, catalog):
        """Test a standee of an unknown monster does not stop the reveal."""
        scenario_data = ScenarioData.from_dict({
            "index": "50",
            "name": "Broken",
            "edition": "gh",
            "objectives": [{"name": "Chest"}],
            "rooms": [
                {"roomNumber": 1, "initial": True, "rooms": [2]},
                {
                    "roomNumber": 2,
                    "objectives": [1],
                    "monster": [{"name": "nope", "type": "normal"}, {"name": "bandit-guard", "type": "elite"}],
                },
            ],
        })
        manager.game.scenario = Scenario(scenario_data)
        entities = manager.rooms.open_room(scenario_data.rooms[1], scenario_data)

        assert len(entities) == 1
        assert manager.game.scenario.revealed_rooms == [2]
        assert any(isinstance(f, ObjectiveContainer) for f in manager.game.figures)

    def test_reopening_room_is_ignored(self, manager, catalog):
        """Test a revealed room is not revealed twice."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)

        assert manager.game.scenario.revealed_rooms == [1, 2]
        assert len(_monster(manager, "living-bones").entities) == 3

    def test_room_reveal_activates_room_rules(self, manager, catalog):
        """Test rules gated on a room apply as soon as it is revealed."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        assert all(a.identifier.index != 2 for a in manager.game.scenario_rules)

        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)
        assert any(a.identifier.index == 2 for a in manager.game.scenario_rules)


class TestMidRoundActivation:
    """Tests for standees revealed while turns are in progress."""

    def test_spawned_monster_active_when_nobody_is(self, manager, catalog):
        """Test new standees act immediately if no figure is active."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.game.state = GameState.NEXT

        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)
        bones = _monster(manager, "living-bones")
        assert bones.active
        assert all(e.active for e in bones.entities)

    def test_spawned_monster_waits_for_active_figure(self, manager, catalog):
        """Test new standees do not take over when another figure is active."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.game.state = GameState.NEXT
        manager.characters.characters()[0].active = True

        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)
        bones = _monster(manager, "living-bones")
        assert not bones.active
        assert not any(e.active for e in bones.entities)

    def test_spawned_entities_follow_initiative(self, manager, catalog):
        """Test standees of a monster before the active figure are marked active."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.game.state = GameState.NEXT

        # bandit-guard is in play; a figure after it is active
        guard = _monster(manager, "bandit-guard")
        manager.game.figures.remove(guard)
        manager.game.figures.insert(0, guard)
        manager.characters.characters()[-1].active = True

        room = ScenarioData.from_dict({
            "index": "1",
            "name": "Black Barrow",
            "edition": "gh",
            "rooms": [{"roomNumber": 4, "monster": [{"name": "bandit-guard", "type": "elite"}]}],
        }).rooms[0]
        manager.rooms.open_room(room, scenario_data)

        assert not guard.active
        new = [e for e in guard.entities if e.type == MonsterType.ELITE]
        assert len(new) == 1 and new[0].active

    def test_no_activation_in_draw_phase(self, manager, catalog):
        """Test standees revealed during the draw phase stay inactive."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)

        bones = _monster(manager, "living-bones")
        assert not bones.active
        assert not any(e.active for e in bones.entities)


class TestClosedRooms:
    """Tests for the reveal frontier."""

    def test_frontier_after_start(self, manager, catalog):
        """Test the initial room's neighbours are revealable."""
        manager.scenarios.set_scenario(catalog.get_scenario("gh", None, "1"))
        assert [r.room_number for r in manager.rooms.closed_rooms()] == [2]
        assert manager.rooms.open_rooms() == []
        assert [r.room_number for r in manager.rooms.open_rooms(initial=True)] == [1]

    def test_frontier_grows(self, manager, catalog):
        """Test revealing a room exposes its neighbours and hides itself."""
        scenario_data = catalog.get_scenario("gh", None, "1")
        manager.scenarios.set_scenario(scenario_data)
        manager.rooms.open_room(_room(scenario_data, 2), scenario_data)

        closed = [r.room_number for r in manager.rooms.closed_rooms()]
        assert closed == [3]
        revealed = manager.game.scenario.revealed_rooms
        assert not set(closed) & set(revealed)
        for room in manager.rooms.open_rooms():
            for neighbour in room.rooms:
                assert neighbour in revealed or neighbour in closed

    def test_no_scenario(self, manager):
        """Test no scenario means no rooms."""
        assert manager.rooms.closed_rooms() == []
        assert manager.rooms.open_rooms(initial=True) == []
