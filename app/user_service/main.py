# user_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="User Service (dev mock)")


USERS = {
    1: {"userId": 1, "firstName": "Jan", "lastName": "Kowalski", "email": "jan@example.com", "phone": "+48500100200"},
    2: {"userId": 2, "firstName": "Anna", "lastName": "Nowak", "email": "anna@example.com", "phone": "+48500300400"},
    3: {"userId": 3, "firstName": "Piotr", "lastName": "Wisniewski", "email": "piotr@example.com", "phone": None},
}

@app.get("/api/users/{user_id}")
def get_user(user_id: int):
    user = USERS.get(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
