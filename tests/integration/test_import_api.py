"""Integration tests for POST /upload-csv/{kind} and DELETE /clear/{kind}."""

from reviews_api.config.settings import get_settings
from reviews_api.main import app

SOFTWARE_CSV = (
    "rating,title,text,images,asin,parent_asin,user_id,timestamp,helpful_vote,verified_purchase,extra\n"
    "5,Great,Works well,,B01,B01,U1,1588615855070,2,true,ignored\n"
    "2,Meh,Crashes,shot.png,B02,B02,U2,1546300800000,0,false,ignored\n"
    "4,Good,,,B03,B03,U3,,,,ignored\n"
)


def upload(client, kind, text, filename="data.csv"):
    return client.post(
        f"/upload-csv/{kind}",
        files={"file": (filename, text.encode("utf-8"), "text/csv")},
    )


class TestSoftwareImport:
    def test_inserts_every_row(self, client):
        response = upload(client, "software", SOFTWARE_CSV)
        assert response.status_code == 200
        assert response.json() == {"message": "Imported 3 software successfully.", "inserted": 3}
        assert client.get("/software").json()["total"] == 3

    def test_values_are_coerced(self, client):
        upload(client, "software", SOFTWARE_CSV)
        docs = {d["title"]: d for d in client.get("/software").json()["docs"]}
        assert docs["Great"]["rating"] == 5
        assert docs["Great"]["timestamp"] == 1588615855070
        assert docs["Great"]["verified_purchase"] is True
        assert docs["Great"]["images"] == []
        assert docs["Meh"]["images"] == ["shot.png"]
        assert docs["Meh"]["verified_purchase"] is False
        assert docs["Good"]["timestamp"] is None
        assert docs["Good"]["helpful_vote"] is None
        assert "extra" not in docs["Great"]

    def test_reimport_duplicates(self, client):
        upload(client, "software", SOFTWARE_CSV)
        upload(client, "software", SOFTWARE_CSV)
        assert client.get("/software").json()["total"] == 6

    def test_rejected_row_inserts_nothing(self, client):
        text = "rating,title\n5,Fine\nfive,Broken\n"
        response = upload(client, "software", text)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Import failed."
        assert "Row 3" in body["details"]
        assert "rating" in body["details"]
        assert client.get("/software").json()["total"] == 0

    def test_header_only_file_inserts_nothing(self, client):
        response = upload(client, "software", "rating,title\n")
        assert response.status_code == 200
        assert response.json()["inserted"] == 0


class TestFlexibleImport:
    def test_structured_cells_are_stored_as_structures(self, client):
        text = 'name,email,profile,note\nAna,ana@example.com,"{""tier"": ""gold""}","{not json"\n'
        assert upload(client, "users", text).json()["inserted"] == 1
        [user] = client.get("/users").json()
        assert user["name"] == "Ana"
        assert user["profile"] == {"tier": "gold"}
        assert user["note"] == "{not json"

    def test_supplied_ids_are_kept(self, client):
        upload(client, "products", "_id,name,price,inStock\np-1,Laptop,999.5,no\np-2,Mouse,,YES\n")
        products = {p["_id"]: p for p in client.get("/products").json()}
        assert products["p-1"]["inStock"] is False
        assert products["p-1"]["price"] == 999.5
        assert products["p-2"]["inStock"] is True
        assert products["p-2"]["price"] is None

    def test_duplicate_ids_fail_the_whole_batch(self, client):
        response = upload(client, "users", "_id,name\nu-1,Ana\nu-1,Bo\n")
        assert response.status_code == 500
        assert "details" in response.json()
        assert client.get("/users").json() == []

    def test_reviews(self, client):
        upload(client, "reviews", "userId,productId,rating,comment\nu-1,p-1,4,Nice\n")
        [review] = client.get("/reviews").json()
        assert review["comment"] == "Nice"
        assert review["rating"] == 4
        assert review["userId"] is None


class TestImportErrors:
    def test_missing_file(self, client):
        response = client.post("/upload-csv/software")
        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded."}

    def test_unknown_kind(self, client):
        response = upload(client, "orders", "a\n1\n")
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown data type: orders"}

    def test_empty_file_cannot_be_parsed(self, client):
        response = upload(client, "users", "")
        assert response.status_code == 500
        assert response.json()["error"] == "Import failed."
        assert response.json()["details"].startswith("Failed to read CSV file")

    def test_oversized_file_is_rejected(self, client):
        settings = get_settings().model_copy(update={"MAX_UPLOAD_SIZE": 64})
        app.dependency_overrides[get_settings] = lambda: settings
        response = upload(client, "software", SOFTWARE_CSV)
        assert response.status_code == 400
        assert response.json() == {"error": "File too large.", "details": "Uploads are limited to 64 bytes."}
        assert client.get("/software").json()["total"] == 0

    def test_file_at_the_limit_is_accepted(self, client):
        settings = get_settings().model_copy(update={"MAX_UPLOAD_SIZE": len(SOFTWARE_CSV.encode())})
        app.dependency_overrides[get_settings] = lambda: settings
        assert upload(client, "software", SOFTWARE_CSV).json()["inserted"] == 3


class TestClear:
    def test_deletes_every_record_of_the_kind(self, client):
        upload(client, "software", SOFTWARE_CSV)
        upload(client, "users", "name\nAna\n")
        response = client.delete("/clear/software")
        assert response.status_code == 200
        assert response.json() == {"message": "All software have been deleted."}
        assert client.get("/software").json()["total"] == 0
        assert len(client.get("/users").json()) == 1

    def test_clearing_an_empty_kind(self, client):
        assert client.delete("/clear/products").status_code == 200

    def test_unknown_kind(self, client):
        response = client.delete("/clear/everything")
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown data type: everything"}
