import attrs


@attrs.frozen
class AttendeeStats:
    current: int
    maximum: int

    @property
    def available(self) -> int:
        return self.maximum - self.current

    def to_dict(self) -> dict[str, int]:
        return {'current': self.current, 'maximum': self.maximum, 'available': self.available}
