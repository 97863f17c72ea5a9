"""
booking_ledger.contract.models

Canonical booking record stored on the ledger.

Responsibilities:
- Define one schema for both flat bookings (`CreateAsset`) and full invoice
  documents (`CreateInvoice`).
- Fix the JSON field names used on the wire and in world state.
- Expose the positional argument order of `CreateAsset`.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LedgerModel(BaseModel):
    # Unknown keys are dropped; records round-trip by alias.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json_bytes(self) -> bytes:
        # Optional location/address parts are omitted rather than written as null.
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class Location(LedgerModel):
    location_name: str = Field(default="", alias="locationName")
    un_location_code: str = Field(default="", alias="UNLocationCode")
    facility_code: str | None = Field(default=None, alias="facilityCode")
    facility_code_list_provider: str | None = Field(
        default=None, alias="facilityCodeListProvider"
    )


class PartyContactDetails(LedgerModel):
    name: str = ""
    phone: int = 0
    email: str = ""
    url: str = ""


class Address(LedgerModel):
    name: str = ""
    street: str = ""
    street_number: int = Field(default=0, alias="streetNumber")
    floor: str | None = None
    post_code: int = Field(default=0, alias="postCode")
    city: str = ""
    state_region: str | None = Field(default=None, alias="stateRegion")
    country: str = ""


class IdentifyingCode(LedgerModel):
    dcsa_responsible_agency_code: str = Field(default="", alias="DCSAResponsibleAgencyCode")
    party_code: str = Field(default="", alias="partyCode")
    code_list_name: str = Field(default="", alias="codeListName")


class Party(LedgerModel):
    party_name: str = Field(default="", alias="partyName")
    tax_reference1: str = Field(default="", alias="taxReference1")
    tax_reference2: str = Field(default="", alias="taxReference2")
    public_key: str = Field(default="", alias="publicKey")
    address: Address = Field(default_factory=Address)
    party_contact_details: list[PartyContactDetails] = Field(
        default_factory=list, alias="partyContactDetails"
    )
    identifying_codes: list[IdentifyingCode] = Field(
        default_factory=list, alias="identifyingCodes"
    )


class DocumentParty(LedgerModel):
    party: Party = Field(default_factory=Party)
    party_function: str = Field(default="", alias="partyFunction")
    displayed_address: list[str] = Field(default_factory=list, alias="displayedAddress")
    is_to_be_notified: bool = Field(default=False, alias="isToBeNotified")


class Reference(LedgerModel):
    type: str = ""
    value: str = ""


class RequestedEquipment(LedgerModel):
    iso_equipment_code: str = Field(default="", alias="ISOEquipmentCode")
    tare_weight: float = Field(default=0.0, alias="tareWeight")
    tare_weight_unit: str = Field(default="", alias="tareWeightUnit")
    units: int = 0
    equipment_references: list[str] = Field(default_factory=list, alias="equipmentReferences")
    is_shipper_owned: bool = Field(default=False, alias="isShipperOwned")
    commodity_requested_equipment_link: str = Field(
        default="", alias="commodityRequestedEquipmentLink"
    )


class ShipmentLocation(LedgerModel):
    location: Location = Field(default_factory=Location)
    shipment_location_type_code: str = Field(default="", alias="shipmentLocationTypeCode")
    event_date_time: str = Field(default="", alias="eventDateTime")


class Commodity(LedgerModel):
    commodity_type: str = Field(default="", alias="commodityType")
    hs_code: str = Field(default="", alias="HSCode")
    cargo_gross_weight: float = Field(default=0.0, alias="cargoGrossWeight")
    cargo_gross_weight_unit: str = Field(default="", alias="cargoGrossWeightUnit")
    cargo_gross_volume: float = Field(default=0.0, alias="cargoGrossVolume")
    cargo_gross_volume_unit: str = Field(default="", alias="cargoGrossVolumeUnit")
    number_of_packages: int = Field(default=0, alias="numberOfPackages")
    export_license_issue_date: str = Field(default="", alias="exportLicenseIssueDate")
    export_license_expiry_date: str = Field(default="", alias="exportLicenseExpiryDate")
    commodity_requested_equipment_link: str = Field(
        default="", alias="commodityRequestedEquipmentLink"
    )


class ValueAddedService(LedgerModel):
    value_added_service_code: str = Field(default="", alias="valueAddedServiceCode")


class Booking(LedgerModel):
    """
    A shipping booking as persisted in world state, keyed by `bookingID`.

    Flat booking fields come first (their order is the `CreateAsset` argument
    order); invoice-only fields follow and default to empty values.
    """

    booking_id: str = Field(
        alias="bookingID",
        min_length=1,
        validation_alias=AliasChoices("bookingID", "bookingid", "booking_id"),
    )
    name: str = ""
    address: str = ""
    phone_number: int = Field(default=0, alias="phoneNumber")
    receipt_type_at_origin: str = Field(default="", alias="receiptTypeAtOrigin")
    delivery_type_at_destination: str = Field(default="", alias="deliveryTypeAtDestination")
    cargo_movement_type_at_origin: str = Field(default="", alias="cargoMovementTypeAtOrigin")
    service_contract_reference: str = Field(default="", alias="serviceContractReference")
    carrier_service_name: str = Field(default="", alias="carrierServiceName")
    carrier_service_code: str = Field(default="", alias="carrierServiceCode")
    universal_service_reference: str = Field(default="", alias="universalServiceReference")
    carrier_export_voyage_number: str = Field(default="", alias="carrierExportVoyageNumber")
    universal_export_voyage_reference: str = Field(
        default="", alias="universalExportVoyageReference"
    )
    declared_value_currency: str = Field(default="", alias="declaredValueCurrency")
    is_partial_load_allowed: bool = Field(default=False, alias="isPartialLoadAllowed")
    is_export_declaration_required: bool = Field(
        default=False, alias="isExportDeclarationRequired"
    )
    export_declaration_reference: str = Field(default="", alias="exportDeclarationReference")
    is_import_license_required: bool = Field(default=False, alias="isImportLicenseRequired")
    import_license_reference: str = Field(default="", alias="importLicenseReference")
    contract_quotation_reference: str = Field(default="", alias="contractQuotationReference")
    booking_channel_reference: str = Field(default="", alias="bookingChannelReference")
    inco_terms: str = Field(default="", alias="incoTerms")
    is_equipment_substitution_allowed: bool = Field(
        default=False, alias="isEquipmentSubstitutionAllowed"
    )

    # Invoice document fields
    cargo_movement_type_at_destination: str = Field(
        default="", alias="cargoMovementTypeAtDestination"
    )
    vessel_name: str = Field(default="", alias="vesselName")
    declared_value: float = Field(default=0.0, alias="declaredValue")
    payment_term_code: str = Field(default="", alias="paymentTermCode")
    is_customs_filing_submission_by_shipper: bool = Field(
        default=False, alias="isCustomsFilingSubmissionByShipper"
    )
    expected_departure_date: str = Field(default="", alias="expectedDepartureDate")
    expected_arrival_at_place_of_delivery_start_date: str = Field(
        default="", alias="expectedArrivalAtPlaceOfDeliveryStartDate"
    )
    expected_arrival_at_place_of_delivery_end_date: str = Field(
        default="", alias="expectedArrivalAtPlaceOfDeliveryEndDate"
    )
    transport_document_type_code: str = Field(default="", alias="transportDocumentTypeCode")
    transport_document_reference: str = Field(default="", alias="transportDocumentReference")
    communication_channel_code: str = Field(default="", alias="communicationChannelCode")
    vessel_imo_number: str = Field(default="", alias="vesselIMONumber")
    pre_carriage_mode_of_transport_code: str = Field(
        default="", alias="preCarriageModeOfTransportCode"
    )
    invoice_payable_at: Location = Field(default_factory=Location, alias="invoicePayableAt")
    place_of_bl_issue: Location = Field(default_factory=Location, alias="placeOfBLIssue")
    commodities: list[Commodity] = Field(default_factory=list)
    value_added_services: list[ValueAddedService] = Field(
        default_factory=list, alias="valueAddedServices"
    )
    references: list[Reference] = Field(default_factory=list)
    requested_equipments: list[RequestedEquipment] = Field(
        default_factory=list, alias="requestedEquipments"
    )
    document_parties: list[DocumentParty] = Field(default_factory=list, alias="documentParties")
    shipment_locations: list[ShipmentLocation] = Field(
        default_factory=list, alias="shipmentLocations"
    )


# Positional argument names of `CreateAsset`, in call order (JSON aliases).
CREATE_ASSET_FIELDS: tuple[str, ...] = tuple(
    Booking.model_fields[name].alias or name
    for name in list(Booking.model_fields)[:23]
)


# --- Module Notes -----------------------------------------------------------
# Integer phone numbers and post codes mirror the records already written by the
# first chaincode version; changing them would break reads of existing state.
