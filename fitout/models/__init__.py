from fitout.models.part import Part
from fitout.models.inventory import InventoryLedgerEntry, InventoryRecord
